"""Tests for the rfp-dataset command line."""

import json

import pytest

from rfp_dataset import cli
from rfp_dataset.errors import LLMConnectionError
from rfp_dataset.pipeline import Pipeline


@pytest.fixture
def documents(tmp_path):
    rfp = tmp_path / "rfp.txt"
    rfp.write_text("Section A: vendor must provide 24/7 support.", encoding="utf-8")
    proposal = tmp_path / "proposal.md"
    proposal.write_text("We offer around-the-clock support every day of the year.", encoding="utf-8")
    return rfp, proposal


def use_client(monkeypatch, client):
    def factory(config, progress):
        return Pipeline(config, client=client, progress=progress)

    monkeypatch.setattr(cli, "Pipeline", factory)


class TestMain:
    def test_writes_dataset(self, monkeypatch, tmp_path, documents, scripted_client, capsys):
        client = scripted_client(
            sections='["Section A: vendor must provide 24/7 support."]',
            relevance="YES",
            answer="We offer around-the-clock support every day of the year.",
        )
        use_client(monkeypatch, client)
        rfp, proposal = documents
        output = tmp_path / "dataset.jsonl"

        code = cli.main(["--rfp", str(rfp), "--proposal", str(proposal), "--output", str(output)])

        assert code == cli.EXIT_OK
        example = json.loads(output.read_text(encoding="utf-8"))
        assert example["messages"][1]["content"] == "We offer around-the-clock support every day of the year."
        captured = capsys.readouterr()
        assert "dataset with 1 entries" in captured.out
        assert "Reading files..." in captured.err

    def test_connection_failure_prints_remediation(self, monkeypatch, tmp_path, documents, scripted_client, capsys):
        use_client(monkeypatch, scripted_client(sections=LLMConnectionError("Start Ollama: ollama serve")))
        rfp, proposal = documents
        output = tmp_path / "dataset.jsonl"

        code = cli.main(["--rfp", str(rfp), "--proposal", str(proposal), "--output", str(output)])

        assert code == cli.EXIT_CONNECTION
        assert "Start Ollama: ollama serve" in capsys.readouterr().err
        assert not output.exists()

    def test_no_complete_pairs(self, monkeypatch, documents, scripted_client, capsys):
        use_client(monkeypatch, scripted_client())
        rfp, _ = documents
        assert cli.main(["--rfp", str(rfp)]) == cli.EXIT_EMPTY
        assert "at least one complete RFP and Proposal pair" in capsys.readouterr().err

    def test_zero_records_writes_nothing(self, monkeypatch, tmp_path, documents, scripted_client, capsys):
        use_client(monkeypatch, scripted_client(sections='["req"]', relevance="NO"))
        rfp, proposal = documents
        output = tmp_path / "dataset.jsonl"

        code = cli.main(["--rfp", str(rfp), "--proposal", str(proposal), "--output", str(output)])

        assert code == cli.EXIT_EMPTY
        assert "could not extract any valid sections" in capsys.readouterr().err
        assert not output.exists()

    def test_pairs_dir(self, monkeypatch, tmp_path, scripted_client):
        for name in ("one", "two"):
            (tmp_path / "pairs" / name / "rfp").mkdir(parents=True)
            (tmp_path / "pairs" / name / "proposal").mkdir(parents=True)
            (tmp_path / "pairs" / name / "rfp" / "r.txt").write_text(f"RFP {name}", encoding="utf-8")
            (tmp_path / "pairs" / name / "proposal" / "p.txt").write_text(f"Answer {name}", encoding="utf-8")
        client = scripted_client(
            sections=lambda prompt: '["req one"]' if "RFP one" in prompt else '["req two"]',
            relevance="YES",
            answer=lambda prompt: "answer one" if "Answer one" in prompt else "answer two",
        )
        use_client(monkeypatch, client)
        output = tmp_path / "dataset.jsonl"

        assert cli.main(["--pairs-dir", str(tmp_path / "pairs"), "--output", str(output)]) == cli.EXIT_OK
        lines = output.read_text(encoding="utf-8").split("\n")
        assert [json.loads(line)["messages"][1]["content"] for line in lines] == ["answer one", "answer two"]


class TestOverrides:
    def test_flags_override_settings(self, test_settings):
        args = cli.build_parser().parse_args(
            ["--chunk-size", "500", "--model", "llama3:8b", "--url", "http://h:1/api/generate", "--log-level", "debug"]
        )
        config = cli.apply_overrides(test_settings, args)
        assert config.page_chunk_size == 500
        assert config.ollama_model == "llama3:8b"
        assert config.ollama_url == "http://h:1/api/generate"
        assert config.log_level == "DEBUG"
        assert test_settings.page_chunk_size == 10_000

    def test_non_positive_chunk_size_is_rejected(self):
        with pytest.raises(SystemExit):
            cli.main(["--chunk-size", "0"])

    def test_unknown_log_level_is_rejected(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--log-level", "chatty"])
        assert excinfo.value.code == 2
        assert "--log-level must be one of" in capsys.readouterr().err
