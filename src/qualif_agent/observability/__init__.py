"""Observabilidade: logging estruturado e correlation_id."""
