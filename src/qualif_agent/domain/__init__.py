"""Camada de domínio: persona, turnos de conversa e erros."""
