"""Gestor de Produtos: cadastro de usuarios e produtos sobre um banco local."""

__version__ = "1.0.0"
