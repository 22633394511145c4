"""
Lexer de títulos.

El texto extraído del PDF no conserva saltos de línea confiables, así que
los títulos se localizan con patrones:

- Identificador: 1, 1.2, 1.21.1
- Anotación de evaluación: (Scored), (Not Scored), (Automated), (Manual)
- Título de regla: "<id> <nombre> (Scored)"
- Título de grupo: "<id> <nombre> ......" (sin anotación, con relleno de puntos)
- Separador de títulos del índice: "<página> <id del siguiente título>"

Modo AMPLIO (tabla de contenido): parte la página en cada separador.
Modo ESTRICTO (cuerpo): solo títulos de reglas cuyo id ya se conoce.
"""

import re
from typing import Iterable, List, Optional, Pattern

from .models import Evaluacion, ModoTitulo, SpanTitulo, TituloClasificado
from .normalizador import colapsar_espacios


# =============================================================================
# PATRONES REGEX
# =============================================================================

# Identificador: "1" o "1.2" o "1.21.1"
ID = r'(\d+(?:\.\d+)*)'

# Anotación: "(Scored)" o "(Not Scored)"; CIS más recientes usan "(Automated)" / "(Manual)"
ANOTACION = r'\(\s*((?:Not\s+)?Scored|Automated|Manual)\s*\)'

# Un nombre de regla nunca ocupa más que esto entre el id y la anotación
LARGO_MAXIMO_NOMBRE = 400

PATRON_IDENTIFICADOR = re.compile(r'^\d+(?:\.\d+)*$')

# Página del título anterior y id del siguiente: "17 1.1.2"
PATRON_SEPARADOR_TITULOS = re.compile(r'(\d+)\s+' + ID)

# "1.1.1 Ensure mounting of cramfs is disabled (Scored) ...... 18"
PATRON_TITULO_REGLA = re.compile(
    r'^\s*' + ID + r'\s+(.*?)\s*' + ANOTACION,
    re.DOTALL
)

# "1.1 Filesystem Configuration ........ 17"
PATRON_TITULO_GRUPO = re.compile(
    r'^\s*' + ID + r'\s+(.+?)\s*(?:\.\s*){2,}',
    re.DOTALL
)

# Nunca coincide: índice sin reglas
PATRON_VACIO = re.compile(r'(?!)')


class TituloMalformado(ValueError):
    """El texto no tiene forma de título de regla ni de grupo."""

    def __init__(self, titulo: str):
        self.titulo = titulo
        super().__init__(
            f"No se pudo interpretar el título como regla ni como grupo: {titulo!r}"
        )


# =============================================================================
# FUNCIONES
# =============================================================================

def es_identificador(texto: str) -> bool:
    """True si el texto es un identificador (1, 1.2, 1.2.3)."""
    return bool(PATRON_IDENTIFICADOR.match(texto))


def construir_patron_reglas(ids: Iterable[str]) -> Pattern:
    """
    Construye el patrón de títulos para el cuerpo del documento.

    Solo acepta los ids de reglas encontrados en el índice, seguidos de un
    nombre y una anotación de evaluación. Los ids más largos van primero en
    la alternancia. El nombre no puede contener el inicio de otro título
    conocido, así una mención en prosa ("5.1 Establish Secure
    Configurations") no alcanza la anotación del título siguiente.

    Args:
        ids: Identificadores de reglas hoja; se ignora lo que no sea id

    Returns:
        Patrón compilado; no coincide con nada si no hay ids
    """
    unicos = sorted(
        {i for i in ids if es_identificador(i)},
        key=lambda i: (-len(i), i)
    )
    if not unicos:
        return PATRON_VACIO

    alternancia = '|'.join(re.escape(i) for i in unicos)
    inicio_titulo = r'(?<![\d.])(?:' + alternancia + r')\s'
    nombre = r'((?:(?!' + inicio_titulo + r').){0,%d}?)' % LARGO_MAXIMO_NOMBRE
    return re.compile(
        r'(?<![\d.])(' + alternancia + r')\s+' + nombre + r'\s*' + ANOTACION,
        re.DOTALL
    )


def buscar_titulos(
    texto: str,
    modo: ModoTitulo,
    patron_reglas: Optional[Pattern] = None
) -> List[SpanTitulo]:
    """
    Busca los títulos de una página.

    En modo AMPLIO cada separador "<página> <id>" cierra un título y abre el
    siguiente; el primero empieza al inicio del texto y el último llega al
    final. Sin separadores no hay títulos.

    En modo ESTRICTO devuelve cada coincidencia de patron_reglas.

    Args:
        texto: Texto de la página sin marcador
        modo: AMPLIO o ESTRICTO
        patron_reglas: Patrón de construir_patron_reglas (requerido en ESTRICTO)

    Returns:
        Lista de SpanTitulo en orden de aparición
    """
    if modo == ModoTitulo.ESTRICTO:
        if patron_reglas is None:
            raise ValueError("El modo ESTRICTO requiere patron_reglas")
        return [
            SpanTitulo(texto=m.group(0), inicio=m.start(), fin=m.end())
            for m in patron_reglas.finditer(texto)
        ]

    separadores = list(PATRON_SEPARADOR_TITULOS.finditer(texto))
    if not separadores:
        return []

    titulos = []
    inicio = 0
    for sep in separadores:
        # Fin del número de página
        fin = sep.end(1)
        titulos.append(SpanTitulo(texto=texto[inicio:fin], inicio=inicio, fin=fin))
        # Inicio del id siguiente
        inicio = sep.start(2)

    titulos.append(SpanTitulo(texto=texto[inicio:], inicio=inicio, fin=len(texto)))
    return titulos


def clasificar_titulo(titulo: str) -> TituloClasificado:
    """
    Separa un título en id, nombre y evaluación.

    Raises:
        TituloMalformado: Si no es regla ni grupo
    """
    match = PATRON_TITULO_REGLA.match(titulo)
    if match:
        return TituloClasificado(
            identificador=match.group(1),
            nombre=colapsar_espacios(match.group(2)).strip(),
            es_regla=True,
            evaluacion=Evaluacion.desde_texto(match.group(3)),
        )

    # Puede ser un grupo de reglas
    match = PATRON_TITULO_GRUPO.match(titulo)
    if match:
        return TituloClasificado(
            identificador=match.group(1),
            nombre=colapsar_espacios(match.group(2)).strip(),
            es_regla=False,
        )

    raise TituloMalformado(titulo)
