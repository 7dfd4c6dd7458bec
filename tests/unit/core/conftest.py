"""Shared fixtures for core unit tests"""

import pytest

from pensieve.core.blocks import parse_blocks


SAMPLE_BODY = """\
# Heading 1

A paragraph with a [link](https://example.com).

- item one
- item two
1. first

![[diagram.png]]

> not a quote
"""


@pytest.fixture(name="sample_blocks")
def sample_blocks_fixture():
    return parse_blocks(SAMPLE_BODY)
