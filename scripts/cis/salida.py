"""
Serialización de reglas a YAML o JSON.

YAML: documento que inicia con "---"; las secciones van al mismo nivel que
id/name/scored. JSON: las secciones van dentro de "sections". En ambos,
"location" se omite cuando está vacía.
"""

import json
from pathlib import Path
from typing import List, Optional, Sequence

import yaml

from .config import FORMATO_DEFAULT, FORMATOS_SALIDA
from .models import Regla


class ErrorSerializacion(Exception):
    """No se pudo generar la salida; detiene la ejecución."""


def regla_a_dict(regla: Regla, formato: str = FORMATO_DEFAULT) -> dict:
    """
    Convierte una regla en diccionario listo para serializar.

    Args:
        regla: Regla extraída
        formato: "yaml" (secciones en línea) o "json" (secciones anidadas)
    """
    datos = {
        "id": regla.id,
        "name": regla.name,
        "scored": regla.scored,
        "assessment": regla.evaluacion.value,
    }

    if regla.location:
        datos["location"] = [
            {"id": u.id, "name": u.name} for u in regla.location
        ]

    if formato == "yaml":
        datos.update(regla.sections)
    else:
        datos["sections"] = dict(regla.sections)

    return datos


def serializar(reglas: Sequence[Regla], formato: str = FORMATO_DEFAULT) -> str:
    """
    Serializa las reglas en el formato pedido.

    Raises:
        ErrorSerializacion: Formato desconocido o fallo del codificador
    """
    formato = (formato or FORMATO_DEFAULT).lower()
    if formato not in FORMATOS_SALIDA:
        raise ErrorSerializacion(
            f"Formato '{formato}' no soportado. Disponibles: {list(FORMATOS_SALIDA)}"
        )

    datos: List[dict] = [regla_a_dict(r, formato) for r in reglas]

    if formato == "json":
        try:
            return json.dumps(datos, ensure_ascii=False, indent=4) + "\n"
        except (TypeError, ValueError) as e:
            raise ErrorSerializacion(f"Error serializando como JSON: {e}") from e

    try:
        contenido = yaml.safe_dump(
            datos,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    except yaml.YAMLError as e:
        raise ErrorSerializacion(f"Error serializando como YAML: {e}") from e
    return f"---\n{contenido}"


def guardar(
    reglas: Sequence[Regla],
    formato: str = FORMATO_DEFAULT,
    output_path: Optional[Path] = None
) -> str:
    """
    Serializa y escribe a archivo; sin output_path solo devuelve el texto.

    Raises:
        ErrorSerializacion: Si falla la serialización o la escritura
    """
    contenido = serializar(reglas, formato)
    if output_path is not None:
        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(contenido)
        except OSError as e:
            raise ErrorSerializacion(f"Error escribiendo {output_path}: {e}") from e
    return contenido
