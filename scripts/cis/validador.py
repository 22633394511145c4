"""
Validación de consistencia entre el índice y las reglas extraídas.

Revisa, sin modificar nada:
- Que cada regla tenga un id presente en el índice
- Que cada regla hoja del índice tenga cuerpo extraído
- Que no haya ids repetidos
- Que toda regla tenga secciones
- Que la ubicación sean ancestros estrictos del id
"""

from collections import Counter
from typing import List

from .jerarquia import ancestros
from .models import Problema, Regla, ResultadoParseo, TipoProblema


class ValidadorConsistencia:
    """
    Validador posterior al parseo.

    Usage:
        validador = ValidadorConsistencia(prefijo_id="CIS-")
        problemas = validador.validar_resultado(resultado)
    """

    def __init__(self, prefijo_id: str = ""):
        self.prefijo_id = prefijo_id or ""
        self.problemas: List[Problema] = []

    def validar_resultado(self, resultado: ResultadoParseo) -> List[Problema]:
        """
        Valida el resultado completo del parseo.

        Returns:
            Lista de problemas detectados
        """
        self.problemas = []
        indice = resultado.indice.indice

        ids_extraidos = [self._sin_prefijo(r.id) for r in resultado.reglas]

        for regla, identificador in zip(resultado.reglas, ids_extraidos):
            self._validar_regla(regla, identificador, indice)

        for identificador, veces in Counter(ids_extraidos).items():
            if veces > 1:
                self.problemas.append(Problema(
                    tipo=TipoProblema.REGLA_DUPLICADA,
                    descripcion=f"La regla {identificador} se extrajo {veces} veces",
                    ubicacion=identificador,
                ))

        extraidos = set(ids_extraidos)
        faltantes = [i for i in resultado.indice.ids_reglas if i not in extraidos]
        for identificador in faltantes:
            self.problemas.append(Problema(
                tipo=TipoProblema.REGLA_FALTANTE,
                descripcion=f"La regla {identificador} del índice no tiene cuerpo extraído",
                ubicacion=identificador,
                severidad="warning",
            ))

        return self.problemas

    def _sin_prefijo(self, identificador: str) -> str:
        if self.prefijo_id and identificador.startswith(self.prefijo_id):
            return identificador[len(self.prefijo_id):]
        return identificador

    def _validar_regla(self, regla: Regla, identificador: str, indice):
        if identificador not in indice:
            self.problemas.append(Problema(
                tipo=TipoProblema.ID_FUERA_DE_INDICE,
                descripcion=f"La regla {identificador} no aparece en el índice",
                ubicacion=identificador,
            ))

        if not regla.sections:
            self.problemas.append(Problema(
                tipo=TipoProblema.SECCIONES_VACIAS,
                descripcion=f"La regla {identificador} no tiene secciones",
                ubicacion=identificador,
            ))

        esperados = [a for a in ancestros(identificador) if a in indice]
        obtenidos = [self._sin_prefijo(u.id) for u in regla.location]
        if obtenidos != esperados:
            self.problemas.append(Problema(
                tipo=TipoProblema.UBICACION_INVALIDA,
                descripcion=f"Ubicación de {identificador} no coincide con sus ancestros",
                ubicacion=identificador,
            ))
