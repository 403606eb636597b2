"""Shared test fixtures."""
from __future__ import annotations

import random

import pytest

from study_quiz.models import Concept


@pytest.fixture
def rng():
    """Seeded randomness so generated sessions are reproducible."""
    return random.Random(1234)


@pytest.fixture
def sample_concepts():
    """Five concepts; three of them carry a comparison."""
    return [
        Concept("Server Components", "Components rendered only on the server",
                "Unlike client components they ship no JavaScript"),
        Concept("Client Components", "Components hydrated in the browser",
                "Unlike server components they can use state and effects"),
        Concept("App Router", "File-system router built on React Server Components",
                "Replaces the pages router with nested layouts"),
        Concept("Middleware", "Code that runs before a request is completed", ""),
        Concept("ISR", "Incremental static regeneration of pages after build", ""),
    ]


@pytest.fixture
def four_concepts():
    return [
        Concept("X", "d1"),
        Concept("Y", "d2"),
        Concept("Z", "d3"),
        Concept("W", "d4"),
    ]


@pytest.fixture
def guide_md_content():
    """Minimal English guide for parser testing."""
    return """\
# Next.js Guide

Intro paragraph that belongs to no concept.

## Server Components

**Description:** Components rendered only on the server.
They never ship JavaScript to the client.

**Example:**
```tsx
export default async function Page() {
  return <h1>Hello</h1>
}
```
This line explains the example and must be ignored.

**Comparison:** Unlike client components,
they cannot use state.

## Routing Overview

Just some prose without any labelled field.

## Middleware

**Description:** Runs before a request is completed.
"""


@pytest.fixture
def guide_md_content_es():
    """Minimal Spanish guide for parser testing."""
    return """\
# Guía de NestJS

## Módulos

**Descripción:** Agrupan controladores y proveedores.

**Comparación:** A diferencia de los servicios, no contienen lógica.

**Ejemplo:**
```ts
@Module({})
```

## Proveedores

**Descripción:** Clases inyectables.
"""
