from config import DEFAULT_BASE_URL, get_cj_config


def test_defaults(monkeypatch):
    monkeypatch.delenv("CJ_TOKEN", raising=False)
    monkeypatch.delenv("CJ_BASE_URL", raising=False)
    monkeypatch.delenv("CJ_TIMEOUT", raising=False)

    config = get_cj_config()

    assert config == {"token": "", "base_url": DEFAULT_BASE_URL, "timeout": 30}


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("CJ_TOKEN", "  abc  ")
    monkeypatch.setenv("CJ_BASE_URL", "https://cj.test/api2.0/")
    monkeypatch.setenv("CJ_TIMEOUT", "nope")

    config = get_cj_config()

    assert config["token"] == "abc"
    assert config["base_url"] == "https://cj.test/api2.0"
    assert config["timeout"] == 30
