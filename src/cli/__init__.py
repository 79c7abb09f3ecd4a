"""Capa CLI (Typer + Rich): comandos de vista y diagnóstico."""
