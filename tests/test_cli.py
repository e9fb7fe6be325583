import json

import analyze_contract
from autotruth.services.analyzer import ContractAnalyzer


class _Stub:
    def __init__(self, reply):
        self.reply = reply
        self.parts = None

    def generate_content(self, parts):
        self.parts = parts
        return self.reply


def test_cli_prints_outcome(tmp_path, capsys, fenced_reply, sample_analysis):
    path = tmp_path / "contract.png"
    path.write_bytes(b"\x89PNG fake")
    stub = _Stub(fenced_reply)

    code = analyze_contract.main([str(path)], analyzer=ContractAnalyzer(client=stub))

    out, err = capsys.readouterr()
    assert code == 0
    assert json.loads(out) == {"success": True, "data": sample_analysis}
    assert "58/100 (Poor)" in err
    assert stub.parts[1]["inline_data"]["mime_type"] == "image/png"


def test_cli_mime_type_override_and_failure(tmp_path, capsys):
    path = tmp_path / "contract.bin"
    path.write_bytes(b"data")
    stub = _Stub("{}")

    code = analyze_contract.main([str(path), "--mime-type", "text/plain"], analyzer=ContractAnalyzer(client=stub))

    out, _ = capsys.readouterr()
    assert code == 1
    assert json.loads(out) == {"success": False, "error": "Only image and PDF files are supported"}
    assert stub.parts is None


def test_cli_missing_path(tmp_path, capsys):
    code = analyze_contract.main([str(tmp_path / "missing.pdf")], analyzer=ContractAnalyzer(client=_Stub("{}")))
    assert code == 1
    assert "Error reading" in capsys.readouterr().err
