"""CasaDF - modelo de domínio imobiliário e regras de integridade."""

__version__ = "1.0.0"
