"""
Segunda pasada: cuerpos de las reglas.

A partir de la página donde termina el índice, busca los títulos de las
reglas conocidas. Todo el texto entre un título y el siguiente es el cuerpo
de la regla, aunque cruce varias páginas. Al cerrar cada cuerpo:
- Se divide en secciones (Description, Audit, ...)
- Se reconstruye la jerarquía a partir del id
- Se descarta si no tiene ninguna sección

El recorrido termina cuando se extrajeron tantas reglas como había en el
índice, para no leer los apéndices.
"""

import logging
import re
from enum import Enum
from typing import List, Optional, Sequence

from .config import LOGGER_NAME, get_config
from .extractor import Extractor
from .indice import PasadaIndice
from .jerarquia import resolver_ubicacion
from .lexer import TituloMalformado, clasificar_titulo, construir_patron_reglas
from .models import (
    ErrorExtraccion,
    ModoTitulo,
    Regla,
    ResultadoIndice,
    ResultadoParseo,
    SpanTitulo,
    TipoError,
)
from .recorrido import recorrer_paginas, registrar_error
from .secciones import extraer_secciones


class EstadoCuerpo(Enum):
    """Estados de la pasada de cuerpos."""
    ESPERANDO_TITULO = "esperando_titulo"
    ACUMULANDO_CUERPO = "acumulando_cuerpo"
    TERMINADO = "terminado"


class ParserBenchmark:
    """
    Parser de benchmarks CIS en dos pasadas.

    1. Tabla de contenido -> índice de ids y nombres
    2. Cuerpos -> reglas con secciones y ubicación

    Usage:
        parser = ParserBenchmark(prefijo_id="CIS-")
        with crear_extractor(pdf_path) as fuente:
            resultado = parser.parsear(fuente, "Ubuntu 20.04")
    """

    def __init__(
        self,
        perfil: str = "CIS",
        prefijo_id: str = "",
        etiquetas: Optional[Sequence[str]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            perfil: Perfil de configuración (ver config.BENCHMARKS)
            prefijo_id: Texto antepuesto a cada id emitido
            etiquetas: Vocabulario de secciones (default: el del perfil)
            logger: Logger a usar
        """
        config = get_config(perfil)
        self.prefijo_id = prefijo_id or ""
        self.etiquetas = tuple(etiquetas or config["etiquetas_seccion"])
        self.pagina_inicio_indice = config["pagina_inicio_indice"]
        self.patron_marcador = re.compile(config["marcador_pagina"])
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self._reset()

    def _reset(self):
        """Reinicia el estado del parser."""
        self.reglas: List[Regla] = []
        self.errores: List[ErrorExtraccion] = []
        self.estado = EstadoCuerpo.ESPERANDO_TITULO

        self._indice: Optional[ResultadoIndice] = None
        self._restantes = 0
        self._titulo_actual: Optional[str] = None
        self._cuerpo_actual = ""
        self._pagina_actual: Optional[int] = None

    def parsear(self, fuente: Extractor, nombre_doc: str) -> ResultadoParseo:
        """
        Ejecuta ambas pasadas sobre el documento.

        Args:
            fuente: Fuente de páginas
            nombre_doc: Nombre del documento

        Returns:
            ResultadoParseo con reglas, errores y métricas
        """
        self._reset()

        pasada = PasadaIndice(
            pagina_inicio=self.pagina_inicio_indice,
            patron_marcador=self.patron_marcador,
            logger=self.logger,
        )
        indice = pasada.ejecutar(fuente, self.errores)
        self.logger.info(f"Se encontraron {indice.total_reglas} reglas en el índice")

        self._extraer_reglas(fuente, indice)

        resultado = ResultadoParseo(
            documento=nombre_doc,
            indice=indice,
            reglas=list(self.reglas),
            errores=list(self.errores),
        )
        resultado.calcular_metricas()
        return resultado

    def extraer_reglas(self, fuente: Extractor, indice: ResultadoIndice) -> List[Regla]:
        """
        Ejecuta solo la pasada de cuerpos con un índice ya construido.

        Returns:
            Reglas extraídas en orden de aparición
        """
        self._reset()
        return self._extraer_reglas(fuente, indice)

    def _extraer_reglas(self, fuente: Extractor, indice: ResultadoIndice) -> List[Regla]:
        self._indice = indice
        self._restantes = indice.total_reglas

        if self._restantes == 0:
            self.logger.warning("El índice no contiene reglas; no se buscan cuerpos")
            self.estado = EstadoCuerpo.TERMINADO
            return self.reglas

        inicio = indice.pagina_inicio_cuerpo
        if inicio is None:
            inicio = self.pagina_inicio_indice

        recorrer_paginas(
            fuente,
            inicio,
            ModoTitulo.ESTRICTO,
            self._procesar_pagina,
            self.errores,
            patron_reglas=construir_patron_reglas(indice.ids_reglas),
            patron_marcador=self.patron_marcador,
            logger=self.logger,
        )

        # El documento terminó con una regla en curso
        if self.estado == EstadoCuerpo.ACUMULANDO_CUERPO:
            self._cerrar_regla()

        if self.estado == EstadoCuerpo.TERMINADO:
            self.logger.info("Extracción de reglas terminada")

        return self.reglas

    def _procesar_pagina(
        self,
        pagina: int,
        contenido: str,
        titulos: List[SpanTitulo]
    ) -> bool:
        self.logger.debug(f"Buscando reglas en la página {pagina}")
        self._pagina_actual = pagina

        if not titulos:
            if self.estado == EstadoCuerpo.ACUMULANDO_CUERPO:
                self._cuerpo_actual += "\n" + contenido
            return True

        posicion = 0
        for span in titulos:
            if self.estado == EstadoCuerpo.ACUMULANDO_CUERPO:
                # El texto previo al título pertenece a la regla en curso
                previo = contenido[posicion:span.inicio]
                if posicion == 0:
                    self._cuerpo_actual += "\n" + previo
                else:
                    self._cuerpo_actual += previo

                self._cerrar_regla()
                if self.estado == EstadoCuerpo.TERMINADO:
                    return False

            self._titulo_actual = span.texto
            self._cuerpo_actual = ""
            self.estado = EstadoCuerpo.ACUMULANDO_CUERPO
            posicion = span.fin

        self._cuerpo_actual = contenido[posicion:]
        return True

    def _cerrar_regla(self):
        """Construye la regla en curso y actualiza el conteo."""
        titulo = self._titulo_actual
        cuerpo = self._cuerpo_actual

        self._titulo_actual = None
        self._cuerpo_actual = ""
        self.estado = EstadoCuerpo.ESPERANDO_TITULO

        self.logger.debug(f"-- Contenido de la regla {titulo} --\n{cuerpo}\n-- Fin de {titulo} --")

        regla = self._construir_regla(titulo, cuerpo)
        if regla is None:
            return

        self.reglas.append(regla)
        self._restantes -= 1
        if self._restantes == 0:
            self.estado = EstadoCuerpo.TERMINADO

    def _construir_regla(self, titulo: str, cuerpo: str) -> Optional[Regla]:
        """
        Arma una regla a partir de su título y su cuerpo.

        Returns:
            Regla, o None si el título está malformado o no hay secciones
        """
        try:
            clasificado = clasificar_titulo(titulo)
        except TituloMalformado as e:
            registrar_error(self.errores, ErrorExtraccion(
                tipo=TipoError.TITULO_MALFORMADO,
                descripcion="Título de regla malformado",
                pagina=self._pagina_actual,
                detalles=e.titulo.strip(),
            ), self.logger)
            return None

        secciones = extraer_secciones(cuerpo, self.etiquetas)
        if not secciones:
            registrar_error(self.errores, ErrorExtraccion(
                tipo=TipoError.SIN_SECCIONES,
                descripcion=f"Sin secciones válidas para la regla {clasificado.identificador}",
                pagina=self._pagina_actual,
                detalles=clasificado.nombre,
            ), self.logger)
            return None

        return Regla(
            id=self.prefijo_id + clasificado.identificador,
            name=clasificado.nombre,
            evaluacion=clasificado.evaluacion,
            location=tuple(resolver_ubicacion(
                self._indice.indice,
                clasificado.identificador,
                self.prefijo_id,
            )),
            sections=secciones,
        )
