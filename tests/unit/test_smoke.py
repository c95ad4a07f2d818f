"""Basic smoke tests for the service scaffolding."""

def test_imports():
    import interview_evaluation  # noqa: F401
    import llm_gateway  # noqa: F401
    from config.settings import settings

    assert settings.DB_PATH.endswith(".db")
