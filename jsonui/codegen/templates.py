"""Jinja2 templates for the generated component, data and state modules."""

from __future__ import annotations

from typing import Any

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError

from ..errors import TemplateRenderError

HEADER = "// Generated by jsonui from {{ source }} - do not edit directly"

COMPONENT_TEMPLATE = HEADER + """
import React from "react";
{% for module, clause in modules %}
import {{ clause }} from "{{ module }}";
{% endfor %}
{% for component in components %}
import {{ component }} from "./{{ component }}";
{% endfor %}
{% if typescript and data_import %}
import type { {{ name }}Data } from "{{ data_import }}";
{% endif %}

{% if typescript %}
interface {{ name }}Props {
  data: {{ name ~ "Data" if data_import else "any" }};
  viewModel?: any;
}

export const {{ name }} = ({ data, viewModel }: {{ name }}Props) => {
{% else %}
export const {{ name }} = ({ data, viewModel }) => {
{% endif %}
  return (
{{ markup }}
  );
};

export default {{ name }};
"""

DATA_MODEL_TEMPLATE = HEADER + """
{% if typescript %}

export interface {{ name }}Data {
{% for field in fields %}
  {{ field.name }}{{ "?" if field.optional else "" }}: {{ field.ts_type }};
{% else %}
  // No data properties declared
{% endfor %}
}

export const create{{ name }}Data = (): {{ name }}Data => ({
{% else %}

/**
 * @typedef {Object} {{ name }}Data
{% for field in fields %}
 * @property {{ "{" ~ field.ts_type ~ "}" }} {{ "[" ~ field.name ~ "]" if field.optional else field.name }}
{% endfor %}
 */

/** @returns {{ "{" ~ name ~ "Data}" }} */
export const create{{ name }}Data = () => ({
{% endif %}
{% for field in fields %}
  {{ field.name }}: {{ field.default }},
{% endfor %}
});
"""

STATE_TEMPLATE = HEADER + """
import { useState } from "react";
{% if typescript %}
import { {{ name }}Data, create{{ name }}Data } from "{{ data_import }}";

export function use{{ name }}ViewModel(initial?: Partial<{{ name }}Data>) {
  const [data, setData] = useState<{{ name }}Data>(() => ({ ...create{{ name }}Data(), ...initial }));
{% else %}
import { create{{ name }}Data } from "{{ data_import }}";

export function use{{ name }}ViewModel(initial) {
  const [data, setData] = useState(() => ({ ...create{{ name }}Data(), ...initial }));
{% endif %}

  return {
    data: {
      ...data,
{% for handler in handlers %}
      {{ handler.name }}: data.{{ handler.name }} ?? (({{ "value: " ~ handler.ts_type if typescript else "value" }}) => setData((prev) => ({ ...prev, {{ handler.prop }}: value }))),
{% endfor %}
    },
    setData,
  };
}
"""

_ENVIRONMENT = Environment(
    loader=DictLoader({
        "component": COMPONENT_TEMPLATE,
        "data_model": DATA_MODEL_TEMPLATE,
        "state": STATE_TEMPLATE,
    }),
    undefined=StrictUndefined,
    autoescape=False,  # generating code, not HTML
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_template(template: str, /, **context: Any) -> str:
    """Render one of the module templates; failures raise ``TemplateRenderError``."""
    try:
        return _ENVIRONMENT.get_template(template).render(**context)
    except TemplateError as exc:
        raise TemplateRenderError(
            f"Failed to render {template} template: {exc}",
            hint="This is a bug in jsonui; please report it with the layout that triggered it",
        ) from exc
