import longscore


def test_public_api_is_exported() -> None:
    for name in longscore.__all__:
        assert hasattr(longscore, name), name


def test_segment_error_is_a_generation_error() -> None:
    error = longscore.SegmentError(3, RuntimeError("x"))
    assert isinstance(error, longscore.GenerationError)
    assert isinstance(error, longscore.LongScoreError)
    assert error.index == 3
