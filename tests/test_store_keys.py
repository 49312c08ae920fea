import hashlib

from store import keys


def test_slug_consistency():
    v = "hello"
    assert keys._slug(v) == hashlib.sha256(v.encode()).hexdigest()[:32]


def test_keys_format():
    assert keys.forecast("python", "daily", "ensemble") == f"tc:forecast:{keys._slug('python')}:daily:ensemble"
    assert keys.forecasts("python") == f"tc:forecast:{keys._slug('python')}:*"
    assert keys.forecast("a b", "weekly", "linear") != keys.forecast("a-b", "weekly", "linear")
