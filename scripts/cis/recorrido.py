"""
Recorrido genérico de páginas.

Ambas pasadas (índice y cuerpo) comparten la misma forma: leer cada página,
quitar el marcador, buscar títulos con un modo del lexer y reaccionar. Las
páginas que fallan se registran y se saltan; el recorrido nunca se aborta
por una página.
"""

import logging
from typing import Callable, List, Optional, Pattern

from .config import LOGGER_NAME
from .extractor import ErrorExtraccionPagina, Extractor
from .lexer import buscar_titulos
from .models import ErrorExtraccion, ModoTitulo, SpanTitulo, TipoError
from .normalizador import cortar_marcador_pagina


# (página, contenido sin marcador, títulos) -> False para detener el recorrido
FuncionPagina = Callable[[int, str, List[SpanTitulo]], bool]


def registrar_error(
    errores: List[ErrorExtraccion],
    error: ErrorExtraccion,
    logger: Optional[logging.Logger] = None
):
    """Agrega el error a la lista y lo reporta en el log."""
    logger = logger or logging.getLogger(LOGGER_NAME)
    errores.append(error)
    if error.detalles:
        logger.warning(f"{error.descripcion}: {error.detalles}")
    else:
        logger.warning(error.descripcion)


def recorrer_paginas(
    fuente: Extractor,
    inicio: int,
    modo: ModoTitulo,
    fn: FuncionPagina,
    errores: List[ErrorExtraccion],
    patron_reglas: Optional[Pattern] = None,
    patron_marcador: Optional[Pattern] = None,
    logger: Optional[logging.Logger] = None
) -> Optional[int]:
    """
    Recorre las páginas desde inicio hasta la última.

    Args:
        fuente: Fuente de páginas
        inicio: Primera página a visitar (base 1)
        modo: Modo de búsqueda de títulos
        fn: Se llama por cada página válida con sus títulos
        errores: Lista donde se acumulan los errores recuperables
        patron_reglas: Patrón de títulos para el modo ESTRICTO
        patron_marcador: Patrón del marcador de página
        logger: Logger a usar

    Returns:
        Página en la que fn detuvo el recorrido, o None si llegó al final
    """
    logger = logger or logging.getLogger(LOGGER_NAME)

    for pagina in range(max(inicio, 1), fuente.total_paginas + 1):
        try:
            texto = fuente.texto_pagina(pagina)
        except ErrorExtraccionPagina as e:
            registrar_error(errores, ErrorExtraccion(
                tipo=TipoError.EXTRACCION_PAGINA,
                descripcion=f"No se pudo extraer la página {pagina} como texto",
                pagina=pagina,
                detalles=e.motivo,
            ), logger)
            continue

        contenido, ok = cortar_marcador_pagina(texto, patron_marcador)
        if not ok:
            registrar_error(errores, ErrorExtraccion(
                tipo=TipoError.MARCADOR_AUSENTE,
                descripcion=f"No se encontró el marcador de página en la página {pagina}",
                pagina=pagina,
            ), logger)
            continue

        titulos = buscar_titulos(contenido, modo, patron_reglas)
        if not fn(pagina, contenido, titulos):
            return pagina

    return None
