"""Camada de aplicação: handler do webhook e simulação."""
