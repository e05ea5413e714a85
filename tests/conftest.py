from typing import Iterator

import pytest

from parsetree.variables import DEFAULT_VARIABLES


@pytest.fixture(autouse=True)
def reset_default_variables() -> Iterator[None]:
    DEFAULT_VARIABLES.reset()
    yield
    DEFAULT_VARIABLES.reset()
