"""
Reconstrucción de la jerarquía de una regla a partir de su identificador.
"""

from typing import List, Mapping

from .models import Ubicacion

SEPARADOR_ID = "."


def ancestros(identificador: str) -> List[str]:
    """Prefijos estrictos del id, de la raíz al padre (3.2.4 -> [3, 3.2])."""
    partes = identificador.split(SEPARADOR_ID)
    return [SEPARADOR_ID.join(partes[:i]) for i in range(1, len(partes))]


def resolver_ubicacion(
    indice: Mapping[str, str],
    identificador: str,
    prefijo: str = ""
) -> List[Ubicacion]:
    """
    Cadena de ancestros de una regla.

    Solo se incluyen los ancestros presentes en el índice; los ausentes se
    omiten sin inventarlos.

    Args:
        indice: Identificador -> nombre, de la tabla de contenido
        identificador: Id de la regla (sin prefijo)
        prefijo: Texto antepuesto a cada id emitido

    Returns:
        Lista de Ubicacion de la raíz al padre
    """
    return [
        Ubicacion(id=prefijo + padre, name=indice[padre])
        for padre in ancestros(identificador)
        if padre in indice
    ]
