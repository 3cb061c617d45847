import importlib
import os
import constants

ENV_NAMES = ("PORT", "ORIGIN")


def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("PORT=4555\nORIGIN=https://a.example, https://b.example\n")
    monkeypatch.chdir(tmp_path)
    for name in ENV_NAMES:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)

    try:
        reloaded = importlib.reload(constants)

        assert reloaded.PORT == 4555
        assert reloaded.ALLOWED_ORIGINS == ["https://a.example", "https://b.example"]
    finally:
        # load_dotenv writes into os.environ; put everything back before reloading
        for name in ENV_NAMES:
            os.environ.pop(name, None)
        monkeypatch.undo()
        importlib.reload(constants)


def test_environment_wins_over_dotenv_file(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("PORT=4555\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PORT", "5001")

    try:
        assert importlib.reload(constants).PORT == 5001
    finally:
        monkeypatch.undo()
        importlib.reload(constants)
