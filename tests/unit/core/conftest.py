"""Shared fixtures for core unit tests"""

import pytest

from mdsync.config import Settings
from mdsync.core.parse import lex
from mdsync.core.style import default_styles


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** and *italic* text.

## Heading 2

- item one
- item `two`
  - nested item

```python
print("hello")
```

> Quoted line.

---

Footer paragraph with an emoji 😀.
"""


@pytest.fixture(name="sample_tokens")
def sample_tokens_fixture():
    return lex(SAMPLE_MD)


@pytest.fixture(name="registry")
def registry_fixture():
    """Default style registry for a 16pt body."""
    return default_styles(Settings())
