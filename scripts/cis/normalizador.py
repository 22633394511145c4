"""
Normalización del texto plano de cada página.

Funciones puras:
- Corte del marcador de página ("17 | Page") al inicio del texto
- Colapso de espacios
- Eliminación de caracteres no ASCII (artefactos de la extracción)
"""

import re
from typing import Pattern, Tuple, Union

from .config import BENCHMARKS


# Marcador de página por defecto: "17 | Page"
PATRON_MARCADOR_PAGINA = re.compile(BENCHMARKS["CIS"]["marcador_pagina"])

PATRON_ESPACIOS = re.compile(r'\s+')

PATRON_NO_ASCII = re.compile(r'[^\x00-\x7f]')


def cortar_marcador_pagina(
    texto: str,
    patron: Union[str, Pattern, None] = None
) -> Tuple[str, bool]:
    """
    Quita el marcador de página del inicio del texto.

    Args:
        texto: Texto plano de la página
        patron: Patrón del marcador (default: "<n> | Page")

    Returns:
        (cuerpo, True) si se encontró el marcador, ("", False) si no
    """
    if patron is None:
        patron = PATRON_MARCADOR_PAGINA
    elif isinstance(patron, str):
        patron = re.compile(patron)

    match = patron.match(texto)
    if not match:
        return "", False
    return texto[match.end():], True


def colapsar_espacios(texto: str) -> str:
    """Reemplaza cada secuencia de espacios por un solo espacio."""
    return PATRON_ESPACIOS.sub(' ', texto)


def quitar_no_ascii(texto: str) -> str:
    """Elimina los caracteres fuera de ASCII."""
    return PATRON_NO_ASCII.sub('', texto)


def normalizar_contenido(texto: str) -> str:
    """Limpia el texto de una sección: sin no-ASCII, recortado y colapsado."""
    return colapsar_espacios(quitar_no_ascii(texto).strip())
