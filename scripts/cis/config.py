"""
Configuración por tipo de benchmark.

Cada perfil define el marcador de página, dónde empieza la tabla de
contenido y el vocabulario de secciones.
"""

import logging
from pathlib import Path
from typing import Optional

BENCHMARKS = {
    "CIS": {
        "nombre": "CIS Benchmark",

        # Primera página donde puede aparecer la tabla de contenido (base 1)
        "pagina_inicio_indice": 2,

        # Marcador al inicio del texto de cada página: "17 | Page"
        "marcador_pagina": r'^\s*(\d+)\s+\|\s+Page',

        # Etiquetas de sección, en el orden en que suelen aparecer
        "etiquetas_seccion": (
            "Profile Applicability",
            "Description",
            "Rationale",
            "Audit",
            "Remediation",
            "Impact",
            "Default Value",
            "References",
            "CIS Controls",
        ),
    },
}

FORMATOS_SALIDA = ("yaml", "json")
FORMATO_DEFAULT = "yaml"

LOGGER_NAME = "cis"


def get_config(codigo: str) -> dict:
    """Obtiene la configuración de un perfil de benchmark."""
    codigo = codigo.upper()
    if codigo not in BENCHMARKS:
        raise ValueError(
            f"Benchmark '{codigo}' no configurado. Disponibles: {list(BENCHMARKS.keys())}"
        )
    return BENCHMARKS[codigo]


def listar_benchmarks() -> list:
    """Lista los perfiles configurados."""
    return list(BENCHMARKS.keys())


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    """Configura el sistema de logging."""
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    return logger
