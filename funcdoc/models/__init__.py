from .definition import NO_DEFAULT, Definition, Parameter, ReturnSpec

__all__ = ["NO_DEFAULT", "Definition", "Parameter", "ReturnSpec"]
