"""
Fuentes de páginas.

Entregan el texto plano de cada página, numeradas desde 1:
- PDF (fuente principal): PyMuPDF
- TXT: volcado de pdftotext, páginas separadas por salto de página (\\f)
- Memoria: lista de textos, útil para pruebas

Un fallo al extraer una página se reporta con ErrorExtraccionPagina; quien
recorre las páginas decide si la salta.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Sequence

import fitz  # PyMuPDF

from .models import FuenteDatos


SEPARADOR_PAGINAS_TXT = "\f"


class ErrorExtraccionPagina(Exception):
    """No se pudo obtener el texto de una página."""

    def __init__(self, pagina: int, motivo: str):
        self.pagina = pagina
        self.motivo = motivo
        super().__init__(f"Página {pagina}: {motivo}")


# =============================================================================
# CLASE BASE
# =============================================================================

class Extractor(ABC):
    """
    Clase base abstracta para fuentes de páginas.

    Usage:
        with crear_extractor(path) as fuente:
            for n in range(1, fuente.total_paginas + 1):
                texto = fuente.texto_pagina(n)
    """

    @property
    @abstractmethod
    def total_paginas(self) -> int:
        """Número de páginas del documento."""
        pass

    @abstractmethod
    def texto_pagina(self, numero: int) -> str:
        """
        Texto plano de una página.

        Args:
            numero: Número de página (base 1)

        Raises:
            ErrorExtraccionPagina: Si la página no existe o falla la extracción
        """
        pass

    @property
    @abstractmethod
    def fuente(self) -> FuenteDatos:
        """Tipo de fuente de este extractor."""
        pass

    def cerrar(self):
        """Libera recursos de la fuente."""

    def _validar_numero(self, numero: int):
        if not 1 <= numero <= self.total_paginas:
            raise ErrorExtraccionPagina(
                numero, f"fuera de rango (1-{self.total_paginas})"
            )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cerrar()
        return False


def _verificar_archivo(file_path) -> Path:
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Archivo no encontrado: {file_path}")
    return file_path


# =============================================================================
# EXTRACTOR PDF
# =============================================================================

class PdfExtractor(Extractor):
    """Extractor de texto de PDF con PyMuPDF y caché por página."""

    def __init__(self, file_path: Path):
        self.file_path = _verificar_archivo(file_path)
        self.doc = fitz.open(str(self.file_path))
        self._cache_paginas: Dict[int, str] = {}

    @property
    def fuente(self) -> FuenteDatos:
        return FuenteDatos.PDF

    @property
    def total_paginas(self) -> int:
        return len(self.doc)

    def texto_pagina(self, numero: int) -> str:
        self._validar_numero(numero)
        if numero not in self._cache_paginas:
            try:
                self._cache_paginas[numero] = self.doc[numero - 1].get_text()
            except RuntimeError as e:
                raise ErrorExtraccionPagina(numero, str(e)) from e
        return self._cache_paginas[numero]

    def cerrar(self):
        if not self.doc.is_closed:
            self.doc.close()


# =============================================================================
# EXTRACTOR TXT
# =============================================================================

class TxtExtractor(Extractor):
    """
    Extractor para texto plano exportado con pdftotext.

    Cada salto de página (\\f) separa una página; el salto final que agrega
    pdftotext no genera una página vacía.
    """

    def __init__(self, file_path: Path):
        self.file_path = _verificar_archivo(file_path)
        # Bytes inválidos se reemplazan; el normalizador descarta lo no ASCII
        with open(self.file_path, 'r', encoding='utf-8', errors='replace') as f:
            contenido = f.read()

        paginas = contenido.split(SEPARADOR_PAGINAS_TXT)
        if paginas and not paginas[-1].strip():
            paginas.pop()
        self._paginas: List[str] = paginas

    @property
    def fuente(self) -> FuenteDatos:
        return FuenteDatos.TXT

    @property
    def total_paginas(self) -> int:
        return len(self._paginas)

    def texto_pagina(self, numero: int) -> str:
        self._validar_numero(numero)
        return self._paginas[numero - 1]


# =============================================================================
# EXTRACTOR EN MEMORIA
# =============================================================================

class MemoriaExtractor(Extractor):
    """Páginas ya extraídas, en orden."""

    def __init__(self, paginas: Sequence[str]):
        self._paginas = list(paginas)

    @property
    def fuente(self) -> FuenteDatos:
        return FuenteDatos.MEMORIA

    @property
    def total_paginas(self) -> int:
        return len(self._paginas)

    def texto_pagina(self, numero: int) -> str:
        self._validar_numero(numero)
        return self._paginas[numero - 1]


# =============================================================================
# FACTORY
# =============================================================================

def crear_extractor(file_path: Path) -> Extractor:
    """
    Factory que crea el extractor apropiado según extensión.

    Raises:
        ValueError: Si el tipo de archivo no es soportado
    """
    file_path = Path(file_path)
    suffix = file_path.suffix.lower()

    if suffix == '.pdf':
        return PdfExtractor(file_path)
    elif suffix == '.txt':
        return TxtExtractor(file_path)
    else:
        raise ValueError(f"Tipo de archivo no soportado: {suffix}")
