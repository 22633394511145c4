"""
Tests de integración: línea de comandos sobre archivos reales.

Ejecutar con: pytest -m integracion
"""

import json
import pytest
import yaml
from pathlib import Path
import sys

# Agregar scripts/ al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from parsear_cis import crear_argparser, main


IDS_ESPERADOS = ["1.1.1", "1.1.2", "2.1", "3.1", "3.2.1"]


class TestArgumentos:
    """Tests del parser de argumentos."""

    def test_valores_por_defecto(self):
        args = crear_argparser().parse_args(["doc.pdf"])
        assert args.format == "yaml"
        assert args.id_prefix == ""
        assert args.out is None
        assert args.perfil == "CIS"

    def test_formato_invalido(self):
        with pytest.raises(SystemExit):
            crear_argparser().parse_args(["doc.pdf", "--format", "xml"])


@pytest.mark.integracion
class TestLineaDeComandos:
    """Tests de main() sobre el benchmark sintético."""

    def test_txt_a_yaml(self, benchmark_txt_path, tmp_path):
        salida = tmp_path / "reglas.yaml"
        assert main([str(benchmark_txt_path), "-o", str(salida)]) == 0

        contenido = salida.read_text(encoding="utf-8")
        assert contenido.startswith("---\n")
        datos = yaml.safe_load(contenido)
        assert [d["id"] for d in datos] == IDS_ESPERADOS
        assert datos[0]["description"].startswith("The cramfs filesystem")

    def test_json_a_stdout(self, benchmark_txt_path, capsys):
        assert main([str(benchmark_txt_path), "--format", "json", "--id-prefix", "CIS-"]) == 0

        captura = capsys.readouterr()
        datos = json.loads(captura.out)
        assert [d["id"] for d in datos] == ["CIS-" + i for i in IDS_ESPERADOS]
        assert datos[4]["location"] == [{"id": "CIS-3", "name": "Network Configuration"}]
        assert "RESUMEN" in captura.err

    def test_txt_con_bytes_invalidos(self, paginas_benchmark, tmp_path):
        """Un byte Latin-1 en una página no detiene el recorrido."""
        paginas = [p.encode("utf-8") for p in paginas_benchmark]
        paginas[5] = paginas[5].replace(b"command:", b"command caf\xe9:")
        path = tmp_path / "benchmark_latin1.txt"
        path.write_bytes(b"\f".join(paginas) + b"\f")
        salida = tmp_path / "reglas.yaml"

        assert main([str(path), "-o", str(salida)]) == 0

        datos = yaml.safe_load(salida.read_text(encoding="utf-8"))
        assert [d["id"] for d in datos] == IDS_ESPERADOS
        assert datos[0]["audit"] == "Run the following command caf: modprobe -n -v cramfs"

    def test_archivo_inexistente(self, tmp_path):
        assert main([str(tmp_path / "no_existe.pdf")]) == 1

    def test_tipo_no_soportado(self, tmp_path):
        path = tmp_path / "doc.docx"
        path.write_bytes(b"")
        assert main([str(path)]) == 1

    def test_log_file(self, benchmark_txt_path, tmp_path):
        log = tmp_path / "logs" / "parseo.log"
        assert main([str(benchmark_txt_path), "-o", str(tmp_path / "r.yaml"),
                     "--log-file", str(log)]) == 0

        texto = log.read_text(encoding="utf-8")
        assert "marcador de página" in texto

    def test_pdf(self, benchmark_pdf_path, tmp_path):
        salida = tmp_path / "reglas.json"
        assert main([str(benchmark_pdf_path), "-o", str(salida), "--format", "json"]) == 0

        datos = json.loads(salida.read_text(encoding="utf-8"))
        assert [d["id"] for d in datos] == IDS_ESPERADOS
        assert datos[0]["location"][1]["name"] == "Filesystem Configuration"
        assert datos[1]["scored"] is False
