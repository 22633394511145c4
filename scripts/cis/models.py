"""
Modelos de datos para el parser de benchmarks CIS.

Dataclasses que representan la estructura de un benchmark:
- Títulos clasificados (hojas evaluadas o grupos)
- Ubicación jerárquica de una regla
- Reglas extraídas con sus secciones
- Errores detectados durante el recorrido
- Resultado del índice y resultado final del parseo
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple


class TipoError(Enum):
    """Tipos de error detectados durante la extracción."""
    EXTRACCION_PAGINA = "extraccion_pagina"
    MARCADOR_AUSENTE = "marcador_ausente"
    TITULO_MALFORMADO = "titulo_malformado"
    SIN_SECCIONES = "sin_secciones"


class TipoProblema(Enum):
    """Problemas de consistencia entre el índice y las reglas extraídas."""
    ID_FUERA_DE_INDICE = "id_fuera_de_indice"
    REGLA_FALTANTE = "regla_faltante"
    REGLA_DUPLICADA = "regla_duplicada"
    SECCIONES_VACIAS = "secciones_vacias"
    UBICACION_INVALIDA = "ubicacion_invalida"


class Evaluacion(Enum):
    """Anotación de evaluación que acompaña al título de una regla."""
    SCORED = "Scored"
    NOT_SCORED = "Not Scored"
    AUTOMATED = "Automated"
    MANUAL = "Manual"

    @property
    def es_evaluada(self) -> bool:
        """True si la regla cuenta para el puntaje."""
        return self in (Evaluacion.SCORED, Evaluacion.AUTOMATED)

    @classmethod
    def desde_texto(cls, texto: str) -> "Evaluacion":
        """Convierte "Not  Scored", "Scored", ... en la anotación."""
        normalizado = " ".join(texto.split())
        return cls(normalizado)


class FuenteDatos(Enum):
    """Fuentes de páginas soportadas."""
    PDF = "pdf"
    TXT = "txt"
    MEMORIA = "memoria"


class ModoTitulo(Enum):
    """Modo de búsqueda de títulos del lexer."""
    AMPLIO = "amplio"        # Índice: cualquier "<id> <nombre> .... <página>"
    ESTRICTO = "estricto"    # Cuerpo: solo ids de reglas conocidas + evaluación


@dataclass(frozen=True)
class SpanTitulo:
    """
    Fragmento de texto de una página que parece un título.

    Attributes:
        texto: Texto crudo del título
        inicio: Posición inicial dentro del texto de la página
        fin: Posición final (exclusiva)
    """
    texto: str
    inicio: int
    fin: int


@dataclass(frozen=True)
class TituloClasificado:
    """
    Título separado en identificador, nombre y evaluación.

    Una regla hoja trae anotación (Scored)/(Not Scored); un grupo no.
    """
    identificador: str
    nombre: str
    es_regla: bool
    evaluacion: Optional[Evaluacion] = None


@dataclass(frozen=True)
class Ubicacion:
    """Ancestro de una regla: id y nombre."""
    id: str
    name: str


@dataclass(frozen=True)
class Regla:
    """
    Regla de un benchmark CIS.

    Attributes:
        id: Identificador (con prefijo si se configuró)
        name: Nombre de la regla
        evaluacion: Anotación de evaluación del título
        location: Cadena de ancestros, de la raíz al padre
        sections: Clave de sección -> texto normalizado
    """
    id: str
    name: str
    evaluacion: Evaluacion
    location: Tuple[Ubicacion, ...] = ()
    sections: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Las secciones se entregan como vista de solo lectura sobre una copia
        object.__setattr__(self, "location", tuple(self.location))
        object.__setattr__(self, "sections", MappingProxyType(dict(self.sections)))

    @property
    def scored(self) -> bool:
        return self.evaluacion.es_evaluada


@dataclass
class SeccionCruda:
    """
    Sección tal como aparece en el cuerpo de la regla.

    etiqueta incluye los dos puntos y el espacio que la siguen, de modo que
    etiqueta + valor reproduce el texto original.
    """
    nombre: str
    etiqueta: str
    valor: str
    inicio: int


@dataclass
class ErrorExtraccion:
    """
    Error recuperable detectado durante el recorrido.

    Attributes:
        tipo: Categoría del error
        descripcion: Descripción legible
        pagina: Página donde se detectó (si aplica)
        detalles: Texto relacionado (título, excepción)
    """
    tipo: TipoError
    descripcion: str
    pagina: Optional[int] = None
    detalles: Optional[str] = None


@dataclass
class Problema:
    """
    Problema de consistencia detectado por el validador.

    severidad: 'error' rompe un invariante, 'warning' es informativo
    """
    tipo: TipoProblema
    descripcion: str
    ubicacion: Optional[str] = None
    severidad: str = "error"


@dataclass(frozen=True)
class ResultadoIndice:
    """
    Resultado de la pasada sobre la tabla de contenido.

    El índice se entrega como vista de solo lectura.
    """
    indice: Mapping[str, str]
    ids_reglas: Tuple[str, ...]
    pagina_inicio_cuerpo: Optional[int]

    @property
    def total_reglas(self) -> int:
        return len(self.ids_reglas)

    @classmethod
    def congelar(
        cls,
        indice: Dict[str, str],
        ids_reglas: List[str],
        pagina_inicio_cuerpo: Optional[int],
    ) -> "ResultadoIndice":
        """Copia el índice construido y lo entrega congelado."""
        return cls(
            indice=MappingProxyType(dict(indice)),
            ids_reglas=tuple(ids_reglas),
            pagina_inicio_cuerpo=pagina_inicio_cuerpo,
        )


@dataclass
class ResultadoParseo:
    """
    Resultado final del parseo de un benchmark.

    Incluye:
    - Reglas extraídas y el índice usado para ubicarlas
    - Errores recuperables del recorrido
    - Métricas de cobertura
    """
    documento: str
    indice: ResultadoIndice
    reglas: List[Regla] = field(default_factory=list)
    errores: List[ErrorExtraccion] = field(default_factory=list)

    # Métricas
    total_reglas: int = 0
    reglas_esperadas: int = 0
    reglas_descartadas: int = 0

    def calcular_metricas(self):
        """Calcula métricas basándose en reglas y errores."""
        self.total_reglas = len(self.reglas)
        self.reglas_esperadas = self.indice.total_reglas
        self.reglas_descartadas = len([
            e for e in self.errores if e.tipo == TipoError.SIN_SECCIONES
        ])

    def errores_por_tipo(self, tipo: TipoError) -> List[ErrorExtraccion]:
        return [e for e in self.errores if e.tipo == tipo]

    @property
    def porcentaje_exito(self) -> float:
        """Porcentaje de reglas del índice que se extrajeron."""
        if self.reglas_esperadas == 0:
            return 0.0
        return self.total_reglas / self.reglas_esperadas * 100
