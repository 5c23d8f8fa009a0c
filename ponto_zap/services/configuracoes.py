def buscar_configuracao(cursor, chave):
    cursor.execute("SELECT value FROM settings WHERE `key`=%s", (chave,))
    row = cursor.fetchone()
    return row['value'] if row else None
