"""Shared fixtures for core unit tests"""

import pytest

from pageturtle.core.parse import _make_parser


SAMPLE_MD = """\
---
title: Sample
date: 2024-02-01
tags: [python, blog]
table_of_contents: true
---

# Heading 1

A paragraph with **bold** text and ![diagram](../img/diagram.png).

## Heading 2

- item one
- item two

```python
print("hello")
```
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return _make_parser()


@pytest.fixture(name="sample_tokens")
def sample_tokens_fixture(parser):
    return parser.parse(SAMPLE_MD)
