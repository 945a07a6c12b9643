"""Wren: form definitions and compiled answer validation.

Build a form from typed field descriptors, compile it once, and validate
submitted answers as often as you like.

Basic usage::

    from wren import FormDefinition, NumberField, TextField, compile_form

    form = FormDefinition(
        id="signup",
        name="Sign up",
        fields=(
            TextField(id="email", label="Email", required=True, is_email=True),
            NumberField(id="age", label="Age", min=18, max=120),
        ),
    )

    validator = compile_form(form)
    result = validator.validate({"email": "a@b.com", "age": "42"})
    if result:
        print(result.data)  # {"email": "a@b.com", "age": 42}
    else:
        print(result.errors)

Loading a stored definition::

    from wren.codec import load_path
    form = load_path("signup.json")
"""

__version__ = "0.1.0"
__all__ = [
    "CheckboxField",
    "CompilationCache",
    "CompilationError",
    "CompilerConfig",
    "ConfigurationError",
    "DateField",
    "DefinitionError",
    "DuplicateFieldIdError",
    "FieldDescriptor",
    "FieldKind",
    "FormDefinition",
    "FormEditor",
    "FormValidator",
    "Invalid",
    "NumberField",
    "PatchError",
    "RadioField",
    "SelectField",
    "TextAreaField",
    "TextField",
    "UnknownFieldKindError",
    "Valid",
    "ValidationResult",
    "WrenError",
    "compile_field",
    "compile_form",
    "lint_definition",
    "new_field",
]


# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "CompilerConfig": "wren.config",
    "FormEditor": "wren.editor",
    "FormDefinition": "wren.definition",
    "lint_definition": "wren.definition",
    "CheckboxField": "wren.fields",
    "DateField": "wren.fields",
    "FieldDescriptor": "wren.fields",
    "FieldKind": "wren.fields",
    "NumberField": "wren.fields",
    "RadioField": "wren.fields",
    "SelectField": "wren.fields",
    "TextAreaField": "wren.fields",
    "TextField": "wren.fields",
    "new_field": "wren.fields",
    "CompilationCache": "wren.validation",
    "FormValidator": "wren.validation",
    "Invalid": "wren.validation",
    "Valid": "wren.validation",
    "ValidationResult": "wren.validation",
    "compile_field": "wren.validation",
    "compile_form": "wren.validation",
    "CompilationError": "wren.errors",
    "ConfigurationError": "wren.errors",
    "DefinitionError": "wren.errors",
    "DuplicateFieldIdError": "wren.errors",
    "PatchError": "wren.errors",
    "UnknownFieldKindError": "wren.errors",
    "WrenError": "wren.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
