"""
Tests para las fuentes de páginas.

Prueba:
- MemoriaExtractor y TxtExtractor (numeración base 1, rango)
- Factory crear_extractor
- PdfExtractor sobre un PDF generado con PyMuPDF
"""

import pytest
from pathlib import Path
import sys

# Agregar scripts/ al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cis.extractor import (
    ErrorExtraccionPagina,
    MemoriaExtractor,
    PdfExtractor,
    TxtExtractor,
    crear_extractor,
)
from cis.models import FuenteDatos


class TestMemoriaExtractor:
    """Tests para la fuente en memoria."""

    def test_paginas_base_uno(self):
        fuente = MemoriaExtractor(["uno", "dos"])
        assert fuente.total_paginas == 2
        assert fuente.texto_pagina(1) == "uno"
        assert fuente.texto_pagina(2) == "dos"
        assert fuente.fuente == FuenteDatos.MEMORIA

    def test_fuera_de_rango(self):
        fuente = MemoriaExtractor(["uno"])
        with pytest.raises(ErrorExtraccionPagina) as exc:
            fuente.texto_pagina(2)
        assert exc.value.pagina == 2

        with pytest.raises(ErrorExtraccionPagina):
            fuente.texto_pagina(0)

    def test_context_manager(self):
        with MemoriaExtractor(["uno"]) as fuente:
            assert fuente.texto_pagina(1) == "uno"


class TestTxtExtractor:
    """Tests para el volcado de pdftotext."""

    def test_separa_por_salto_de_pagina(self, tmp_path):
        path = tmp_path / "doc.txt"
        path.write_text("1 | Page a\f2 | Page b\f", encoding="utf-8")

        fuente = TxtExtractor(path)
        assert fuente.total_paginas == 2
        assert fuente.texto_pagina(2) == "2 | Page b"
        assert fuente.fuente == FuenteDatos.TXT

    def test_sin_salto_final(self, tmp_path):
        path = tmp_path / "doc.txt"
        path.write_text("a\fb", encoding="utf-8")
        assert TxtExtractor(path).total_paginas == 2

    def test_bytes_invalidos_se_reemplazan(self, tmp_path):
        path = tmp_path / "doc.txt"
        path.write_bytes(b"1 | Page caf\xe9\f2 | Page b\f")

        fuente = TxtExtractor(path)
        assert fuente.total_paginas == 2
        assert fuente.texto_pagina(1) == "1 | Page caf\ufffd"

    def test_archivo_inexistente(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TxtExtractor(tmp_path / "no_existe.txt")

    def test_benchmark(self, benchmark_txt_path, paginas_benchmark):
        fuente = TxtExtractor(benchmark_txt_path)
        assert fuente.total_paginas == len(paginas_benchmark)
        assert fuente.texto_pagina(5) == paginas_benchmark[4]


class TestCrearExtractor:
    """Tests para el factory."""

    def test_txt(self, benchmark_txt_path):
        with crear_extractor(benchmark_txt_path) as fuente:
            assert isinstance(fuente, TxtExtractor)

    def test_tipo_no_soportado(self, tmp_path):
        path = tmp_path / "doc.docx"
        path.write_bytes(b"")
        with pytest.raises(ValueError):
            crear_extractor(path)

    def test_extension_en_mayusculas(self, tmp_path):
        path = tmp_path / "DOC.TXT"
        path.write_text("a", encoding="utf-8")
        assert isinstance(crear_extractor(path), TxtExtractor)


@pytest.mark.integracion
class TestPdfExtractor:
    """Tests sobre un PDF generado con PyMuPDF."""

    def test_total_paginas(self, benchmark_pdf_path, paginas_benchmark):
        with PdfExtractor(benchmark_pdf_path) as fuente:
            assert fuente.total_paginas == len(paginas_benchmark)
            assert fuente.fuente == FuenteDatos.PDF

    def test_texto_de_pagina(self, benchmark_pdf_path):
        with crear_extractor(benchmark_pdf_path) as fuente:
            texto = fuente.texto_pagina(5)

        assert texto.lstrip().startswith("5 | Page")
        assert "cramfs" in texto

    def test_cache_de_paginas(self, benchmark_pdf_path):
        with PdfExtractor(benchmark_pdf_path) as fuente:
            primero = fuente.texto_pagina(3)
            assert fuente.texto_pagina(3) is primero

    def test_fuera_de_rango(self, benchmark_pdf_path):
        with PdfExtractor(benchmark_pdf_path) as fuente:
            with pytest.raises(ErrorExtraccionPagina):
                fuente.texto_pagina(99)

    def test_cerrar_dos_veces(self, benchmark_pdf_path):
        fuente = PdfExtractor(benchmark_pdf_path)
        fuente.cerrar()
        fuente.cerrar()
        assert fuente.doc.is_closed
