"""
Tests unitaires pour le masquage des secrets dans les logs.
"""

from pathlib import Path

from loguru import logger

from cinecache.logging_config import REDACTED, configure_logging, redact_secrets, redact_text


class TestRedactText:
    """Tests pour redact_text."""

    def test_query_parameter_is_masked(self) -> None:
        text = "GET https://api.themoviedb.org/3/movie/550?api_key=abcdef123&language=fr"
        assert redact_text(text) == (
            f"GET https://api.themoviedb.org/3/movie/550?api_key={REDACTED}&language=fr"
        )

    def test_bearer_token_is_masked(self) -> None:
        assert redact_text("Authorization: Bearer eyJhbGciOi.abc") == (
            f"Authorization: Bearer {REDACTED}"
        )

    def test_plain_text_is_unchanged(self) -> None:
        assert redact_text("Image mise en cache") == "Image mise en cache"


class TestRedactSecrets:
    """Tests pour le patcher loguru."""

    def test_secret_keys_and_urls_in_extra(self) -> None:
        record = {
            "message": "Requete ?token=xyz",
            "extra": {
                "api_key": "abcdef",
                "url": "https://cdn.test/a.jpg?access_token=secret",
                "bytes": 1024,
            },
        }

        redact_secrets(record)

        assert record["message"] == f"Requete ?token={REDACTED}"
        assert record["extra"]["api_key"] == REDACTED
        assert record["extra"]["url"] == f"https://cdn.test/a.jpg?access_token={REDACTED}"
        assert record["extra"]["bytes"] == 1024


def test_configure_logging_writes_redacted_json(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "test.log"
    configure_logging(log_level="WARNING", log_file=log_file)
    try:
        logger.info("Appel TMDB", url="https://api.test/3?api_key=supersecret")
        logger.complete()
    finally:
        logger.remove()
        logger.configure(patcher=None)

    content = log_file.read_text(encoding="utf-8")
    assert "supersecret" not in content
    assert REDACTED in content
