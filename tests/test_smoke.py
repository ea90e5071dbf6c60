"""Smoke test to verify the toolchain works."""


def test_import_quran_tracer():
    """Verify the quran_tracer package can be imported."""
    import quran_tracer

    assert quran_tracer.__version__ == "0.1.0"


def test_subpackages_importable():
    """Verify all subpackages can be imported."""
    import quran_tracer.content
    import quran_tracer.progress
    import quran_tracer.tracing

    assert quran_tracer.tracing is not None
    assert quran_tracer.content is not None
    assert quran_tracer.progress is not None


def test_public_entry_points():
    from quran_tracer.tracing import rasterize, score

    assert callable(rasterize)
    assert callable(score)
