"""
Módulo de parseo de benchmarks CIS.

Arquitectura en dos pasadas:
1. Índice: recorrer la tabla de contenido y construir id -> nombre
2. Cuerpos: delimitar cada regla por su título, dividirla en secciones
   y reconstruir su jerarquía
Después: validación de consistencia y salida YAML/JSON
"""

from .models import (
    Evaluacion,
    ErrorExtraccion,
    FuenteDatos,
    ModoTitulo,
    Problema,
    Regla,
    ResultadoIndice,
    ResultadoParseo,
    SeccionCruda,
    SpanTitulo,
    TipoError,
    TipoProblema,
    TituloClasificado,
    Ubicacion,
)
from .extractor import (
    Extractor,
    ErrorExtraccionPagina,
    MemoriaExtractor,
    PdfExtractor,
    TxtExtractor,
    crear_extractor,
)
from .lexer import TituloMalformado, buscar_titulos, clasificar_titulo, construir_patron_reglas
from .secciones import dividir_secciones, extraer_secciones
from .jerarquia import resolver_ubicacion
from .indice import PasadaIndice
from .parser import EstadoCuerpo, ParserBenchmark
from .salida import ErrorSerializacion, serializar
from .validador import ValidadorConsistencia

__all__ = [
    # Models
    'Evaluacion',
    'ErrorExtraccion',
    'FuenteDatos',
    'ModoTitulo',
    'Problema',
    'Regla',
    'ResultadoIndice',
    'ResultadoParseo',
    'SeccionCruda',
    'SpanTitulo',
    'TipoError',
    'TipoProblema',
    'TituloClasificado',
    'Ubicacion',
    # Extractor
    'Extractor',
    'ErrorExtraccionPagina',
    'MemoriaExtractor',
    'PdfExtractor',
    'TxtExtractor',
    'crear_extractor',
    # Lexer
    'TituloMalformado',
    'buscar_titulos',
    'clasificar_titulo',
    'construir_patron_reglas',
    # Secciones y jerarquía
    'dividir_secciones',
    'extraer_secciones',
    'resolver_ubicacion',
    # Pasadas
    'PasadaIndice',
    'EstadoCuerpo',
    'ParserBenchmark',
    # Salida
    'ErrorSerializacion',
    'serializar',
    # Validador
    'ValidadorConsistencia',
]
