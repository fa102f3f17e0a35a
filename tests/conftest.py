"""Test setup for mdbundle."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest.

    This allows running integration tests selectively:
        pytest -m integration       # run only integration tests
        pytest -m "not integration" # skip integration tests
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests that run the full pipeline against files on disk",
    )


@pytest.fixture(autouse=True)
def reset_mdbundle_logging() -> Iterator[None]:
    """Drop handlers installed by configure_logging between tests."""
    yield
    logger = logging.getLogger("mdbundle")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


NAMED_PARAMETERS_DOC = """\
# Named Parameters

## Contents

- [Overview](#overview)
- [Default Values](#default-values)
- [Closures as Parameters](#closures-as-parameters)

## Overview

Named parameters make call sites read like sentences.

```swift
func greet(person: String, from hometown: String) -> String {
    return "Hello \\(person)!  Glad you could visit from \\(hometown)."
}
```

## Default Values

Parameters can declare defaults:

~~~swift
func join(_ s1: String, _ s2: String, joiner: String = " ") -> String {
    return s1 + joiner + s2
}
~~~

## Closures as Parameters

```
let sorted = names.sorted { $0 > $1 }
```
"""


@pytest.fixture
def named_parameters_doc() -> str:
    """A well-formed topic file with a matching contents list."""
    return NAMED_PARAMETERS_DOC
