"""Domínio: entidades, regras de integridade, schemas e erros."""
