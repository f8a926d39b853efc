import sys

import pytest

from scholaragent import main as cli


def test_missing_credentials_exit_with_status_one(monkeypatch, capsys):
	monkeypatch.setenv('LLM_API_KEYS', '')
	monkeypatch.setattr(cli, 'load_dotenv', lambda: None)
	monkeypatch.setattr(sys, 'argv', ['scholaragent', 'graph neural networks'])

	with pytest.raises(SystemExit) as exc:
		cli.main()

	assert exc.value.code == 1
	assert 'Configuration error' in capsys.readouterr().out


def test_invalid_validation_concurrency_exits_with_status_one(monkeypatch, capsys):
	monkeypatch.setenv('LLM_API_KEYS', 'k1')
	monkeypatch.setenv('VALIDATION_CONCURRENCY', '0')
	monkeypatch.setattr(cli, 'load_dotenv', lambda: None)
	monkeypatch.setattr(sys, 'argv', ['scholaragent', 'graph neural networks'])

	with pytest.raises(SystemExit) as exc:
		cli.main()

	assert exc.value.code == 1
	assert 'Validation concurrency must be at least 1' in capsys.readouterr().out
