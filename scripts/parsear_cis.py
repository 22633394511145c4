#!/usr/bin/env python3
"""
Parser de benchmarks CIS.

Extrae las reglas de un benchmark CIS (PDF o volcado de texto de pdftotext):
- Índice de grupos y reglas desde la tabla de contenido
- Cuerpo de cada regla dividido en secciones (Description, Audit, ...)
- Ubicación jerárquica de cada regla

Salida: YAML (default) o JSON, a archivo o a stdout

Uso:
    python scripts/parsear_cis.py benchmark.pdf -o reglas.yaml
    python scripts/parsear_cis.py benchmark.pdf --format json --id-prefix CIS-
"""

import argparse
import sys
from pathlib import Path

# Agregar path para imports
sys.path.insert(0, str(Path(__file__).parent))

from cis.config import FORMATO_DEFAULT, FORMATOS_SALIDA, listar_benchmarks, setup_logging
from cis.extractor import crear_extractor
from cis.parser import ParserBenchmark
from cis.salida import ErrorSerializacion, guardar
from cis.validador import ValidadorConsistencia


def crear_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Extraer reglas de un benchmark CIS')
    parser.add_argument('file', help='Archivo a parsear (.pdf o .txt)')
    parser.add_argument('-o', '--out', help='Escribir la salida en este archivo')
    parser.add_argument('--format', choices=FORMATOS_SALIDA, default=FORMATO_DEFAULT,
                        help='Formato de salida (default: yaml)')
    parser.add_argument('--id-prefix', default='', help='Prefijo para los ids de las reglas')
    parser.add_argument('--perfil', default='CIS', choices=listar_benchmarks(),
                        help='Perfil de benchmark')
    parser.add_argument('-v', '--verbose', action='store_true', help='Modo detallado')
    parser.add_argument('--log-file', help='Guardar el log completo en este archivo')
    return parser


def main(argv=None) -> int:
    """Procesa un benchmark y genera la salida estructurada."""
    args = crear_argparser().parse_args(argv)
    logger = setup_logging(verbose=args.verbose, log_file=args.log_file)

    # Con salida a stdout, el resumen va a stderr
    info = sys.stdout if args.out else sys.stderr

    print("=" * 60, file=info)
    print("Parser de benchmarks CIS", file=info)
    print("=" * 60, file=info)

    doc_path = Path(args.file)
    if not doc_path.exists():
        print(f"ERROR: No existe el archivo {doc_path}", file=info)
        return 1

    parser = ParserBenchmark(perfil=args.perfil, prefijo_id=args.id_prefix, logger=logger)

    try:
        with crear_extractor(doc_path) as fuente:
            print(f"   Leyendo: {doc_path.name} ({fuente.total_paginas} páginas)", file=info)
            resultado = parser.parsear(fuente, doc_path.stem)
    except Exception as e:
        print(f"ERROR: {e}", file=info)
        import traceback
        traceback.print_exc()
        return 1

    problemas = ValidadorConsistencia(prefijo_id=args.id_prefix).validar_resultado(resultado)
    for problema in problemas:
        if problema.severidad == "error":
            logger.error(problema.descripcion)
        else:
            logger.debug(problema.descripcion)

    try:
        contenido = guardar(resultado.reglas, args.format, args.out)
    except ErrorSerializacion as e:
        print(f"ERROR: {e}", file=info)
        return 1

    if args.out:
        print(f"\n   Guardado: {args.out}", file=info)
    else:
        sys.stdout.write(contenido)

    print("\n" + "=" * 60, file=info)
    print("RESUMEN", file=info)
    print("=" * 60, file=info)
    print(f"Documento: {resultado.documento}", file=info)
    print(f"Reglas en el índice: {resultado.reglas_esperadas}", file=info)
    print(f"Reglas extraídas: {resultado.total_reglas} ({resultado.porcentaje_exito:.1f}%)", file=info)
    print(f"Reglas descartadas: {resultado.reglas_descartadas}", file=info)
    print(f"Errores recuperados: {len(resultado.errores)}", file=info)
    print(f"Problemas de consistencia: {len(problemas)}", file=info)

    return 0


if __name__ == "__main__":
    exit(main())
