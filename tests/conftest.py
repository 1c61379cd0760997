"""
Test fixtures for mailgroups tests.

This module provides:
- A fresh GroupRegistry per test
- Configuration dictionaries and YAML files
- Environment isolation for MAILGROUPS_* overrides
"""
import os
import pytest
import yaml

from mailgroups.registry import GroupRegistry
from mailgroups.address_list import parse_addresses
from mailgroups.membership import add_addresses


# ============================================================================
# Registry Fixtures
# ============================================================================

@pytest.fixture
def registry():
    """Return an empty registry; torn down after the test."""
    reg = GroupRegistry()
    yield reg
    reg.reset()


@pytest.fixture
def team(registry):
    """Group 'team' holding alice@example.com."""
    group = registry.resolve_or_create("team")
    add_addresses(group, parse_addresses("alice@example.com"))
    return group


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def groups_config_dict():
    """Return a complete groups configuration dictionary."""
    return {
        'logging': {
            'level': 'INFO',
            'format': 'plain',
        },
        'matching': {
            'ignore_case': True,
        },
        'statements': [
            {
                'action': 'group',
                'groups': ['team'],
                'addresses': ['Alice Example <alice@example.com>', 'bob@example.com'],
            },
            {
                'action': 'group',
                'groups': ['vip', 'team'],
                'patterns': ['^boss@'],
            },
            {
                'action': 'group',
                'groups': ['temp'],
                'addresses': ['carol@example.com'],
            },
            {
                'action': 'ungroup',
                'groups': ['temp'],
                'addresses': ['carol@example.com'],
            },
        ],
    }


@pytest.fixture
def groups_config_file(tmp_path, groups_config_dict):
    """Write groups_config_dict to a YAML file and return its path."""
    config_file = tmp_path / "groups.yaml"
    with open(config_file, 'w') as f:
        yaml.dump(groups_config_dict, f)
    return str(config_file)


@pytest.fixture
def invalid_regex_config_file(tmp_path):
    """Config whose second statement carries an uncompilable pattern."""
    content = '''
statements:
  - action: group
    groups: [team]
    addresses: ["alice@example.com"]
  - action: group
    groups: [team, vip]
    patterns: ["(unclosed"]
'''
    p = tmp_path / "groups.yaml"
    p.write_text(content)
    return str(p)


@pytest.fixture(autouse=True)
def clean_mailgroups_env(monkeypatch):
    """Keep MAILGROUPS_* variables from the outer environment out of tests."""
    for key in list(os.environ):
        if key.startswith('MAILGROUPS_'):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def restore_environ():
    """Snapshot os.environ and put it back; load_dotenv writes straight into it."""
    saved = dict(os.environ)
    yield
    os.environ.clear()
    os.environ.update(saved)
