"""
Fixtures para tests del parser de benchmarks CIS.

Proporciona datos de prueba para:
- Páginas de un benchmark sintético (portada, índice, cuerpos, apéndice)
- Índices ya construidos
- Archivos TXT y PDF generados en directorios temporales
"""

import pytest
from pathlib import Path
import sys

# Agregar scripts/ al path para imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cis.extractor import MemoriaExtractor
from cis.models import ResultadoIndice


# =============================================================================
# PÁGINAS DE PRUEBA
# =============================================================================

PAGINAS_BENCHMARK = [
    # 1: portada (la tabla de contenido se busca desde la página 2)
    "1 | Page CIS Ubuntu Linux Benchmark",
    # 2: índice
    "2 | Page Table of Contents Overview .......... 5 "
    "1 Initial Setup ............ 4 "
    "1.1 Filesystem Configuration ........... 4 "
    "1.1.1 Ensure mounting of cramfs is disabled (Scored) ........ 5 "
    "1.1.2 Ensure /tmp is configured (Not Scored) ....... 7",
    # 3: índice (continúa)
    "3 | Page 2 Services ............ 7 "
    "2.1 Ensure xinetd is not installed (Scored) ....... 7 "
    "3 Network Configuration ...... 9 "
    "3.1 Ensure IP forwarding is disabled (Scored) ....... 9 "
    "3.2.1 Ensure packet redirect sending is disabled (Scored) ...... 10",
    # 4: inicio de los cuerpos, sin títulos de regla
    "4 | Page 1 Initial Setup Items in this section are advised for all systems. "
    "1.1 Filesystem Configuration Directories used for system-wide functions "
    "can be further protected.",
    # 5: regla 1.1.1 (continúa en la página 6)
    "5 | Page 1.1.1 Ensure mounting of cramfs is disabled (Scored) "
    "Profile Applicability: Level 1 - Server "
    "Description: The cramfs filesystem type is a compressed read-only Linux filesystem. "
    "Rationale: Removing support for unneeded filesystem types reduces the local attack surface.",
    # 6: fin de 1.1.1
    "6 | Page Audit: Run the following command: modprobe -n -v cramfs "
    "Remediation: Edit or create the file /etc/modprobe.d/CIS.conf",
    # 7: dos reglas en la misma página
    "7 | Page 1.1.2 Ensure /tmp is configured (Not Scored) "
    "Profile Applicability: Level 1 "
    "Description: The /tmp directory is a world-writable directory. "
    "2.1 Ensure xinetd is not installed (Scored) "
    "Description: The eXtended InterNET Daemon provides services. "
    "Remediation: apt purge xinetd",
    # 8: sin marcador de página; se salta
    "Intentionally left blank 3.1 Ensure IP forwarding is disabled (Scored) "
    "Description: bogus",
    # 9: regla 3.1
    "9 | Page 3.1 Ensure IP forwarding is disabled (Scored) "
    "Description: IP forwarding permits the kernel to forward packets. "
    "Audit: sysctl net.ipv4.ip_forward "
    "Default Value: 0",
    # 10: regla 3.2.1 (su padre 3.2 no está en el índice)
    "10 | Page 3.2.1 Ensure packet redirect sending is disabled (Scored) "
    "Description: Redirects are only sent by routers. "
    "CIS Controls: Version 7 5.1 Establish Secure Configurations",
    # 11: apéndice que repite títulos; no debe producir reglas
    "11 | Page 1.1.1 Ensure mounting of cramfs is disabled (Scored) "
    "Description: duplicate from the summary table",
]


@pytest.fixture
def paginas_benchmark():
    """Páginas de texto del benchmark sintético."""
    return list(PAGINAS_BENCHMARK)


@pytest.fixture
def fuente_benchmark(paginas_benchmark):
    """Fuente en memoria con el benchmark sintético."""
    return MemoriaExtractor(paginas_benchmark)


@pytest.fixture
def crear_fuente():
    """Factory para crear fuentes en memoria."""
    def _crear(*paginas: str) -> MemoriaExtractor:
        return MemoriaExtractor(list(paginas))
    return _crear


# =============================================================================
# ÍNDICES
# =============================================================================

@pytest.fixture
def indice_simple():
    """Índice con grupos 3 y 3.2 (sin 3.2.4)."""
    return {
        "3": "Group A",
        "3.2": "Group B",
    }


@pytest.fixture
def crear_indice():
    """Factory para crear ResultadoIndice congelados."""
    def _crear(indice: dict, ids_reglas=None, pagina_inicio_cuerpo=1) -> ResultadoIndice:
        if ids_reglas is None:
            ids_reglas = list(indice.keys())
        return ResultadoIndice.congelar(indice, list(ids_reglas), pagina_inicio_cuerpo)
    return _crear


# =============================================================================
# ARCHIVOS
# =============================================================================

@pytest.fixture
def benchmark_txt_path(tmp_path, paginas_benchmark):
    """Benchmark sintético como volcado de pdftotext (páginas separadas por \\f)."""
    path = tmp_path / "benchmark.txt"
    path.write_text("\f".join(paginas_benchmark) + "\f", encoding="utf-8")
    return path


@pytest.fixture
def benchmark_pdf_path(tmp_path, paginas_benchmark):
    """Benchmark sintético como PDF generado con PyMuPDF."""
    import fitz

    path = tmp_path / "benchmark.pdf"
    doc = fitz.open()
    for texto in paginas_benchmark:
        page = doc.new_page(width=595, height=842)
        page.insert_textbox(fitz.Rect(36, 36, 559, 806), texto, fontsize=9)
    doc.save(str(path))
    doc.close()
    return path
