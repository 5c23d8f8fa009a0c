from ponto_zap.ponto.modelos import StatusFuncionario
from ponto_zap.utils.horario import formatar_duracao

LISTA_COMANDOS = (
    "🟢 *entrada* - Marcar entrada\n"
    "🔴 *saida* - Marcar saída\n"
    "🟡 *pausa* - Iniciar pausa\n"
    "🟢 *volta* - Voltar da pausa\n"
    "📊 *horas* - Ver horas trabalhadas hoje"
)

AJUDA = f"📋 *Comandos disponíveis:*\n\n{LISTA_COMANDOS}\n\nEnvie apenas a palavra do comando."

LOCALIZACAO_RECEBIDA = f"📍 Localização recebida com sucesso!\n\nAgora digite o comando desejado:\n{LISTA_COMANDOS}"

FUNCIONARIO_NAO_ENCONTRADO = "Funcionário não encontrado. Entre em contato com o RH para cadastro."
CONTA_INATIVA = "Sua conta está inativa. Entre em contato com o RH."
ERRO_INTERNO = "❌ Erro interno. Tente novamente."

DICA_LOCALIZACAO = (
    "\n\n📍 Dica: da próxima vez envie primeiro a sua localização "
    "(📎 > Localização > Enviar localização atual) e depois o comando."
)

STATUS_LEGENDA = {
    StatusFuncionario.TRABALHANDO: "🟢 Trabalhando",
    StatusFuncionario.PAUSA: "🟡 Em pausa",
    StatusFuncionario.SAIU: "🔴 Saiu",
    StatusFuncionario.AUSENTE: "⚪ Sem registros",
}


def confirmacao(titulo, nome, hora):
    return f"{titulo}\n⏰ Horário: {hora:%H:%M}\n👤 Funcionário: {nome}"


def fora_do_horario(inicio, fim, agora):
    return (
        "⏰ Fora do horário de trabalho!\n"
        f"📅 Horário permitido: {inicio:%H:%M} às {fim:%H:%M}\n"
        f"🕐 Horário atual: {agora:%H:%M}\n\n"
        "Tente registrar entrada dentro do horário de trabalho."
    )


def resumo_horas(nome, trabalhado, pausa, status):
    return (
        "📊 *Resumo de hoje*\n"
        f"👤 Funcionário: {nome}\n"
        f"⏱️ Tempo trabalhado: {formatar_duracao(trabalhado)}\n"
        f"☕ Tempo em pausa: {formatar_duracao(pausa)}\n"
        f"📌 Status atual: {STATUS_LEGENDA[status]}"
    )


def lembrete_entrada(nome, hora):
    return (
        f"🌅 *Bom dia, {nome}!*\n\n"
        f"⏰ São {hora} e é hora de registar a tua entrada.\n\n"
        "👉 Envia simplesmente: *entrada*\n\n"
        "Tenha um excelente dia de trabalho! 💪"
    )


def lembrete_saida(nome, hora):
    return (
        f"🌆 *Boa tarde, {nome}!*\n\n"
        f"⏰ São {hora} e ainda não registaste a tua saída.\n\n"
        "👉 Não te esqueças de enviar: *saida*\n\n"
        "Se ainda estás a trabalhar, podes ignorar esta mensagem. 😊"
    )


def lembrete_pausa(nome, minutos):
    return (
        f"☕ *{nome}*, a tua pausa já dura {minutos} minutos.\n\n"
        "👉 Quando voltares ao trabalho envia: *volta*"
    )
