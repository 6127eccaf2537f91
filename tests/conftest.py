"""Shared test fixtures for codeshape."""

import os
from collections import Counter

import pytest

from codeshape.config import DEFAULT_EXCLUDE_PATTERNS, DEFAULT_INCLUDE_PATTERNS, AnalysisConfig
from codeshape.scanning import TreeSitterParser
from codeshape.scanning.source import matches_any
from codeshape.session import AnalysisSession

PROJECT_ROOT = "/proj"


class MemoryReader:
    """In-memory source access that counts reads per path."""

    def __init__(self, files):
        self.files = {os.path.abspath(p): text for p, text in files.items()}
        self.reads = Counter()

    def read(self, path):
        self.reads[path] += 1
        return self.files.get(path)

    def scan(self, root, include=None, exclude=None, max_depth=10):
        include = list(include) if include is not None else DEFAULT_INCLUDE_PATTERNS
        exclude = list(exclude) if exclude is not None else DEFAULT_EXCLUDE_PATTERNS
        found = []
        for path in self.files:
            if not path.startswith(root.rstrip("/") + "/"):
                continue
            rel = os.path.relpath(path, root)
            if matches_any(rel, exclude) or not matches_any(rel, include):
                continue
            found.append(path)
        return sorted(found)


@pytest.fixture(scope="session")
def ts_parser():
    """One parser shared across the run; grammars load lazily."""
    return TreeSitterParser()


@pytest.fixture
def parse(ts_parser):
    """Parse ``text`` as if it lived at ``path``."""

    def _parse(text, path="/proj/src/module.ts"):
        return ts_parser.parse_source(path, text)

    return _parse


@pytest.fixture
def make_session(ts_parser):
    """Build a session over in-memory files rooted at /proj."""

    def _make(files, config=None):
        reader = MemoryReader(files)
        session = AnalysisSession(
            config=config or AnalysisConfig(), reader=reader, root=PROJECT_ROOT, parser=ts_parser
        )
        return session, reader

    return _make


USER_LIST_TSX = """\
import { useState } from 'react';
import { supabase } from '../lib/supabase';

export function UserList() {
  const [users, setUsers] = useState([]);
  const load = async () => {
    const { data } = await supabase.from('users').select();
    setUsers(data);
  };
  return <ul>{users.map((u) => <li key={u.id}>{u.name}</li>)}</ul>;
}
"""

VALIDATION_TS = """\
import { z } from 'zod';

const userSchema = z.object({ name: z.string().min(1), email: z.string().email() });

export function validateUser(input) {
  return userSchema.parse(input);
}
"""


def long_module(lines):
    return "\n".join(f"const line{i} = {i};" for i in range(lines)) + "\n"


@pytest.fixture
def user_list_tsx():
    return USER_LIST_TSX


@pytest.fixture
def validation_ts():
    return VALIDATION_TS


@pytest.fixture
def sample_project():
    """A small project: a two-file cycle, a shared helper, an orphan, a big file."""
    return {
        "/proj/src/a.ts": (
            "import { b } from './b';\n"
            "import { helper } from './utils/helper';\n"
            "export const a = () => b() + helper();\n"
        ),
        "/proj/src/b.ts": "import { a } from './a';\nexport function b() { return a(); }\n",
        "/proj/src/utils/helper.ts": "export function helper() { return 1; }\n",
        "/proj/src/orphan.ts": "const unused = 1;\n",
        "/proj/src/big.ts": long_module(450),
        "/proj/node_modules/pkg/index.js": "module.exports = {};\n",
    }


@pytest.fixture
def long_module_text():
    """Factory for a module of ``n`` one-line constant declarations."""
    return long_module
