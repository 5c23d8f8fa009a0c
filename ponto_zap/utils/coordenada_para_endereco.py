import logging
import requests

NOMINATIM_URL = "https://nominatim.openstreetmap.org/reverse"
ENDERECO_NAO_ENCONTRADO = "Endereço não encontrado"


def coordenada_para_endereco(lat, lon):
    """Endereço legível das coordenadas pelo Nominatim. Nunca levanta erro."""
    params = {"format": "json", "lat": lat, "lon": lon, "zoom": 18, "addressdetails": 1}
    try:
        r = requests.get(NOMINATIM_URL, params=params, headers={'User-Agent': 'ponto-zap/1.0'}, timeout=8)
        if r.status_code != 200:
            logging.warning(f"Nominatim respondeu {r.status_code} para {lat},{lon}")
            return ENDERECO_NAO_ENCONTRADO
        return r.json().get('display_name') or ENDERECO_NAO_ENCONTRADO
    except (requests.RequestException, ValueError) as e:
        logging.error(f"Erro ao consultar endereço de {lat},{lon}: {e}")
        return ENDERECO_NAO_ENCONTRADO
