"""Camada de IA: compilação de prompt e gateway de geração."""
