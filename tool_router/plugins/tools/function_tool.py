"""
FunctionTool implementation for the tool router.

A FunctionTool wraps a plain handler function. The handler's first parameter
receives the plugin's data service; the remaining annotated parameters form
the tool's parameter signature and are validated with a generated pydantic
model before every call.
"""
import asyncio
import inspect
import types
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from pydantic import ConfigDict, Field, ValidationError, create_model

from tool_router.domains.errors import ArgumentCoercionError
from tool_router.domains.tools import ParameterSpec
from tool_router.interfaces.plugins.plugins import Tool

_UNION_TYPES = (Union, getattr(types, "UnionType", Union))


def to_pascal_case(name: str) -> str:
    """``get_low_stock_products`` -> ``GetLowStockProducts``"""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def to_camel_case(name: str) -> str:
    """``start_date`` -> ``startDate``"""
    first, *rest = name.split("_")
    return first + "".join(part[:1].upper() + part[1:] for part in rest)


def annotation_text(annotation: Any) -> str:
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation).replace("typing.", "")


def type_name(annotation: Any) -> str:
    """Short type name for a parameter annotation, unwrapping Optional."""
    if get_origin(annotation) in _UNION_TYPES:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        return " | ".join(type_name(member) for member in members)
    origin = get_origin(annotation)
    if origin is not None:
        return annotation_text(origin)
    return annotation_text(annotation)


def summarize_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
        for item in error.errors()
    )


class FunctionTool(Tool):
    """Tool backed by a handler function."""

    def __init__(
        self,
        handler: Callable[..., Any],
        name: Optional[str] = None,
        description: Optional[str] = None,
        response_type_hint: Optional[str] = None,
        parameter_descriptions: Optional[Dict[str, str]] = None,
    ):
        """Inspect the handler and build its argument model.

        Args:
            handler: Function taking the data service first, then tool arguments
            name: Invocation name, defaults to the PascalCase handler name
            description: Tool description, defaults to the handler docstring summary
            response_type_hint: Defaults to the handler's return annotation
            parameter_descriptions: Argument name (snake or camel case) to description
        """
        self._handler = handler
        self._name = name or to_pascal_case(handler.__name__)
        doc = inspect.getdoc(handler) or ""
        self._description = description or " ".join(doc.split("\n\n")[0].split())

        hints = get_type_hints(handler)
        if response_type_hint is None:
            response_type_hint = annotation_text(hints.get("return", Any))
        self._response_type_hint = response_type_hint

        descriptions = parameter_descriptions or {}
        params = list(inspect.signature(handler).parameters.values())
        if not params:
            raise TypeError(
                f"Handler {handler.__name__} must accept a data service argument"
            )

        fields: Dict[str, Any] = {}
        specs: List[ParameterSpec] = []
        for param in params[1:]:
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            annotation = hints.get(param.name, str)
            alias = to_camel_case(param.name)
            required = param.default is inspect.Parameter.empty
            fields[param.name] = (
                annotation,
                Field(... if required else param.default, alias=alias),
            )
            specs.append(
                ParameterSpec(
                    name=alias,
                    type=type_name(annotation),
                    description=descriptions.get(param.name)
                    or descriptions.get(alias, ""),
                    required=required,
                    default=None if required else param.default,
                )
            )

        self._parameters = specs
        self._model = create_model(
            f"{self._name}Arguments",
            __config__=ConfigDict(
                extra="ignore", populate_by_name=True, coerce_numbers_to_str=True
            ),
            **fields,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def parameters(self) -> List[ParameterSpec]:
        return list(self._parameters)

    @property
    def response_type_hint(self) -> str:
        return self._response_type_hint

    @property
    def handler(self) -> Callable[..., Any]:
        return self._handler

    def get_schema(self) -> Dict[str, Any]:
        return self._model.model_json_schema(by_alias=True)

    def coerce(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """Validate arguments against the handler signature.

        Unknown keys are dropped, so tools without parameters accept any map.

        Raises:
            ArgumentCoercionError: An argument is missing or has the wrong type.
        """
        try:
            validated = self._model.model_validate(arguments or {})
        except ValidationError as e:
            raise ArgumentCoercionError(
                f"Invalid arguments for {self._name}: {summarize_validation_error(e)}"
            ) from e
        return {field: getattr(validated, field) for field in self._model.model_fields}

    async def execute(self, data_service: Any, arguments: Dict[str, Any]) -> Any:
        kwargs = self.coerce(arguments)
        if inspect.iscoroutinefunction(self._handler):
            return await self._handler(data_service, **kwargs)
        return await asyncio.to_thread(self._handler, data_service, **kwargs)
