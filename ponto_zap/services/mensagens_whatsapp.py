def salvar_mensagem(cursor, telefone, mensagem, comando=None):
    cursor.execute(
        "INSERT INTO whatsapp_messages (phone, message, command) VALUES (%s, %s, %s)",
        (telefone, mensagem, comando)
    )
    return int(cursor.lastrowid)


def marcar_mensagem_processada(cursor, mensagem_id, resposta):
    cursor.execute(
        "UPDATE whatsapp_messages SET processed=1, response=%s WHERE id=%s",
        (resposta, mensagem_id)
    )
