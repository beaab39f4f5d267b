"""Load form definitions from YAML files.

A definition describes a form's fields and defaults as data:

    form: signup
    errorHelp: invalid
    model:
      newsletter: true
    fields:
      - name: username
        rules: required,minLength:3
        errorHelp:
          minLength: too short
      - name: newsletter
        kind: checkbox
      - name: avatar
        kind: file
        rules: isEachFileType:image/*

Callables (submit callbacks, override validators) can't live in YAML;
they are supplied when the form is built.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from formforge.config import Settings
from formforge.form.fields import Field, FieldValidator, FileHandle
from formforge.form.form import Form, FormConfig, InvalidSubmitCallback, ValidSubmitCallback
from formforge.validation.errors import ConfigurationError
from formforge.validation.types import ErrorHelp, FieldKind

logger = logging.getLogger(__name__)


@dataclass
class FieldDefinition:
    name: str
    kind: FieldKind = FieldKind.TEXT
    rules: str | None = None
    error_help: ErrorHelp = None
    validate_on_event: str | None = None

    def build_field(self, validator: FieldValidator | None = None) -> Field:
        return Field(
            name=self.name,
            kind=self.kind,
            rules=self.rules,
            validator=validator,
            error_help=self.error_help,
            validate_on_event=self.validate_on_event,
        )


@dataclass
class FormDefinition:
    name: str
    fields: list[FieldDefinition] = field(default_factory=list)
    error_help: ErrorHelp = None
    validate_on_event: str | None = None
    model: dict[str, Any] = field(default_factory=dict)

    def build_form(
        self,
        on_valid_submit: ValidSubmitCallback,
        on_invalid_submit: InvalidSubmitCallback | None = None,
        values: dict[str, Any] | None = None,
        validators: dict[str, FieldValidator] | None = None,
        **hooks: Any,
    ) -> Form:
        """Build a Form with one registered Field per definition.

        Args:
            on_valid_submit: Accept callback
            on_invalid_submit: Reject callback (no-op if omitted)
            values: Current values by field name, applied after the model.
                File fields take lists of FileHandle or {name, size, type} dicts.
            validators: Field-local override validators by field name
            **hooks: Form-level validate_one / validate_all overrides
        """
        data: dict[str, Any] = {"model": self.model, "errorHelp": self.error_help}
        if self.validate_on_event:
            data["validateOnEvent"] = self.validate_on_event
        config = FormConfig.from_dict(
            data,
            on_valid_submit=on_valid_submit,
            on_invalid_submit=on_invalid_submit,
            **hooks,
        )
        form = Form(config)

        values = values or {}
        validators = validators or {}
        for definition in self.fields:
            form_field = form.register_field(
                definition.build_field(validators.get(definition.name))
            )
            if definition.name in values:
                form_field.set_value(_coerce_value(form_field.kind, values[definition.name]))

        return form


def _coerce_value(kind: FieldKind, value: Any) -> Any:
    if kind is FieldKind.FILE and value is not None:
        return [
            FileHandle.from_dict(item) if isinstance(item, dict) else item
            for item in value
        ]
    return value


class FormDefinitionLoader:
    """Loads a form definition from a YAML file."""

    def __init__(self, path: Path, settings: Settings | None = None):
        self.path = path
        self.settings = settings if settings is not None else Settings.from_env()

    def load(self) -> FormDefinition:
        """Parse and resolve the definition.

        Raises:
            ConfigurationError: If the file is not valid YAML, has no form,
                or a field entry is not a mapping with a name
        """
        with open(self.path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"{self.path}: YAML parse error: {e}") from e

        if not isinstance(data, dict) or "form" not in data:
            raise ConfigurationError(f"{self.path} does not contain a form definition")

        definition = self._resolve_form(data)
        logger.debug(
            "Loaded form '%s' with %d field(s) from %s",
            definition.name,
            len(definition.fields),
            self.path,
        )
        return definition

    def _resolve_form(self, data: dict) -> FormDefinition:
        fields = data.get("fields") or []
        if not isinstance(fields, list):
            raise ConfigurationError(f"{self.path}: 'fields' must be a list")
        return FormDefinition(
            name=data["form"],
            fields=[self._resolve_field(f) for f in fields],
            error_help=data.get("errorHelp"),
            validate_on_event=data.get("validateOnEvent", self.settings.validate_on_event),
            model=dict(data.get("model") or {}),
        )

    def _resolve_field(self, data: Any) -> FieldDefinition:
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"{self.path}: field entry {data!r} must be a mapping with a \"name\""
            )
        name = data.get("name")
        if not name:
            raise ConfigurationError(
                f'{self.path}: can not add input without "name" attribute'
            )
        return FieldDefinition(
            name=name,
            kind=FieldKind.coerce(data.get("kind")),
            rules=data.get("rules"),
            error_help=data.get("errorHelp"),
            validate_on_event=data.get("validateOnEvent"),
        )
