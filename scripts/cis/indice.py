"""
Primera pasada: tabla de contenido.

Recorre las páginas iniciales buscando títulos con forma de índice
("1.1 Filesystem Configuration ....... 17") y construye:
- El índice identificador -> nombre (grupos y reglas)
- La lista de ids de reglas hoja (con anotación de evaluación)
- La página donde termina el índice y empiezan los cuerpos de las reglas

El índice termina en la primera página sin títulos una vez que ya se
encontró alguno.
"""

import logging
from typing import Dict, List, Optional, Pattern

from .config import LOGGER_NAME
from .extractor import Extractor
from .lexer import TituloMalformado, clasificar_titulo
from .models import (
    ErrorExtraccion,
    ModoTitulo,
    ResultadoIndice,
    SpanTitulo,
    TipoError,
)
from .recorrido import recorrer_paginas, registrar_error


class PasadaIndice:
    """
    Pasada sobre la tabla de contenido.

    Usage:
        pasada = PasadaIndice()
        indice = pasada.ejecutar(fuente, errores)
    """

    def __init__(
        self,
        pagina_inicio: int = 2,
        patron_marcador: Optional[Pattern] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            pagina_inicio: Primera página a revisar (base 1)
            patron_marcador: Patrón del marcador de página
            logger: Logger a usar
        """
        self.pagina_inicio = pagina_inicio
        self.patron_marcador = patron_marcador
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self._reset()

    def _reset(self):
        self._indice: Dict[str, str] = {}
        self._ids_reglas: List[str] = []
        self._pagina_inicio_cuerpo: Optional[int] = None
        self._errores: List[ErrorExtraccion] = []

    def ejecutar(
        self,
        fuente: Extractor,
        errores: Optional[List[ErrorExtraccion]] = None
    ) -> ResultadoIndice:
        """
        Construye el índice del documento.

        Args:
            fuente: Fuente de páginas
            errores: Lista donde acumular errores recuperables

        Returns:
            ResultadoIndice con el índice congelado
        """
        self._reset()
        if errores is not None:
            self._errores = errores

        recorrer_paginas(
            fuente,
            self.pagina_inicio,
            ModoTitulo.AMPLIO,
            self._procesar_pagina,
            self._errores,
            patron_marcador=self.patron_marcador,
            logger=self.logger,
        )

        if self._pagina_inicio_cuerpo is None:
            self.logger.warning("No se detectó el final de la tabla de contenido")

        return ResultadoIndice.congelar(
            self._indice,
            self._ids_reglas,
            self._pagina_inicio_cuerpo,
        )

    def _procesar_pagina(
        self,
        pagina: int,
        contenido: str,
        titulos: List[SpanTitulo]
    ) -> bool:
        self.logger.debug(f"Buscando títulos en la página {pagina}")

        # Terminó la tabla de contenido: las reglas se buscan desde aquí
        if self._indice and not titulos:
            self._pagina_inicio_cuerpo = pagina
            return False

        for span in titulos:
            try:
                titulo = clasificar_titulo(span.texto)
            except TituloMalformado as e:
                registrar_error(self._errores, ErrorExtraccion(
                    tipo=TipoError.TITULO_MALFORMADO,
                    descripcion=f"Título malformado en la página {pagina}",
                    pagina=pagina,
                    detalles=e.titulo.strip(),
                ), self.logger)
                continue

            self.logger.debug(f"id: {titulo.identificador} - nombre: {titulo.nombre}")

            self._indice[titulo.identificador] = titulo.nombre
            if titulo.es_regla and titulo.identificador not in self._ids_reglas:
                self._ids_reglas.append(titulo.identificador)

        return True
