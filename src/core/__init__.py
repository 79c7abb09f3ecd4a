"""Core: dominio, contratos y servicios, sin dependencias de la CLI."""
