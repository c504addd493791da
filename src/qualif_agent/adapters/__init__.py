"""Adapters de provedores externos."""
