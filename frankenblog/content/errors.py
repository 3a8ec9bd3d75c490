"""
errors.py — Excepciones de Frankenblog.

Solo hay dos fallas que el llamador debe ver:
- StorageWriteError: no se pudo escribir un store (disco, permisos).
  Un save o publish perdido en silencio es inaceptable.
- AuthenticationRequired: se llamó al workflow con una sesión anónima.

Leer un store corrupto NO es una excepción: el repositorio lo registra
en el log y devuelve una colección vacía.
"""

from __future__ import annotations


class FrankenblogError(Exception):
    """Base de todas las excepciones del paquete."""


class StorageWriteError(FrankenblogError):
    """No se pudo persistir una colección."""

    def __init__(self, kind: str, path: str, reason: str):
        self.kind = kind
        self.path = path
        self.reason = reason
        super().__init__(f"No se pudo guardar {kind} en {path}: {reason}")


class AuthenticationRequired(FrankenblogError):
    """La operación requiere una sesión autenticada."""

    def __init__(self, operation: str = ""):
        self.operation = operation
        mensaje = "Se requiere iniciar sesión"
        if operation:
            mensaje += f" para {operation}"
        super().__init__(mensaje)
