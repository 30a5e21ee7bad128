import pytest

from contentkit.compiler import Compiler
from contentkit.compiler.config import get_default_compiler


@pytest.fixture
def compiler():
    """A compiler with fresh default registries."""
    return Compiler()


@pytest.fixture
def reset_default_compiler():
    """Rebuild the shared compiler before and after a test that reconfigures it."""
    get_default_compiler.cache_clear()
    yield
    get_default_compiler.cache_clear()
