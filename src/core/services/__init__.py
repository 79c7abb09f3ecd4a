"""Servicios del Core: resolución de direcciones, fan-out, render y vistas."""
