# Lazy imports so `from jstoes.core.dialects import classify` does not
# pull in pydantic and yaml through the config module.

__all__ = [
    "Converter",
    "ConversionResult",
    "convert",
    "ConverterConfig",
    "EdgeCase",
    "load_config",
    "WrapperMismatchError",
]

_IMPORT_MAP = {
    "Converter": ".converter",
    "ConversionResult": ".converter",
    "convert": ".converter",
    "ConverterConfig": ".config",
    "EdgeCase": ".config",
    "load_config": ".config",
    "WrapperMismatchError": ".rewrite",
}


def __getattr__(name):
    if name in _IMPORT_MAP:
        import importlib
        module = importlib.import_module(_IMPORT_MAP[name], __package__)
        return getattr(module, name)
    raise AttributeError(f"module 'jstoes.core' has no attribute {name}")
