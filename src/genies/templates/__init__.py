"""
genies.templates - Jinja2 Component Templates
=============================================

This package contains the Jinja2 templates used to generate component
files. Templates are rendered by ``genies.writer``.

Available Templates
-------------------
    - component.tsx.j2: TypeScript + JSX component (``.tsx``)
    - component.ts.j2: TypeScript component without JSX (``.ts``)
    - component.jsx.j2: JavaScript component (``.jsx`` and ``.js``)

Template Context
----------------
    component_name : str
        StartCase component identifier, e.g. ``MyButton``
"""

# Templates are loaded by Jinja2's PackageLoader.
