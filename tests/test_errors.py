from __future__ import annotations

import pytest

from tealgen import errors


@pytest.mark.parametrize(
    "cls",
    [
        errors.NameEncodingError,
        errors.UnsupportedTypeError,
        errors.MissingTypeBodyError,
        errors.GeneratorConsumedError,
        errors.SnapshotEncodeError,
        errors.SnapshotDecodeError,
    ],
)
def test_errors_share_a_base(cls):
    assert issubclass(cls, errors.TealGenError)
    with pytest.raises(errors.TealGenError):
        raise cls("boom")
