"""
División del cuerpo de una regla en secciones.

Cada etiqueta registrada ("Description:", "Audit:", ...) abre una sección
que llega hasta la siguiente etiqueta o el final del cuerpo. No se asume un
orden: una etiqueta repetida o fuera de lugar absorbe el texto hasta la
siguiente coincidencia.
"""

import re
from functools import lru_cache
from typing import Dict, List, Optional, Pattern, Sequence

from .config import BENCHMARKS
from .models import SeccionCruda
from .normalizador import PATRON_ESPACIOS, normalizar_contenido


ETIQUETAS_SECCION = BENCHMARKS["CIS"]["etiquetas_seccion"]


@lru_cache(maxsize=16)
def _compilar_patron(etiquetas: tuple) -> Pattern:
    alternancia = '|'.join(
        r'\s+'.join(re.escape(palabra) for palabra in etiqueta.split())
        for etiqueta in etiquetas
    )
    return re.compile(r'(\b(' + alternancia + r'):\s+)')


def patron_secciones(etiquetas: Optional[Sequence[str]] = None) -> Pattern:
    """
    Patrón de etiquetas de sección.

    Las etiquetas distinguen mayúsculas y deben ir seguidas de ":" y
    espacio. El espacio interno de una etiqueta ("Default Value") admite
    saltos de línea.
    """
    if etiquetas is None:
        etiquetas = ETIQUETAS_SECCION
    return _compilar_patron(tuple(etiquetas))


PATRON_SECCIONES = patron_secciones()


def clave_seccion(etiqueta: str) -> str:
    """'Default Value: ' -> 'default_value'."""
    clave = etiqueta.strip(' :\t\n\r').lower()
    return PATRON_ESPACIOS.sub('_', clave)


def dividir_secciones(
    cuerpo: str,
    etiquetas: Optional[Sequence[str]] = None
) -> List[SeccionCruda]:
    """
    Corta el cuerpo en secciones sin modificar el texto.

    La concatenación de etiqueta + valor de todas las secciones reproduce
    el cuerpo desde la primera etiqueta hasta el final.

    Args:
        cuerpo: Texto de la regla después del título
        etiquetas: Vocabulario de etiquetas (default: el de CIS)

    Returns:
        Lista de SeccionCruda en orden de aparición, vacía si no hay etiquetas
    """
    hits = list(patron_secciones(etiquetas).finditer(cuerpo))
    secciones = []

    for i, hit in enumerate(hits):
        if i != len(hits) - 1:
            valor = cuerpo[hit.end():hits[i + 1].start()]
        else:
            valor = cuerpo[hit.end():]

        secciones.append(SeccionCruda(
            nombre=hit.group(2),
            etiqueta=hit.group(1),
            valor=valor,
            inicio=hit.start(),
        ))

    return secciones


def extraer_secciones(
    cuerpo: str,
    etiquetas: Optional[Sequence[str]] = None
) -> Dict[str, str]:
    """
    Secciones del cuerpo como clave -> texto normalizado.

    Si una etiqueta se repite, se conserva el último valor.
    """
    return {
        clave_seccion(seccion.nombre): normalizar_contenido(seccion.valor)
        for seccion in dividir_secciones(cuerpo, etiquetas)
    }
