"""Structured records produced from Javadoc pages.

Python attribute names are descriptive; the serialized form uses the key
names the symbol table loader expects (``type``, ``package``, ``args`` ...).
"""

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Parameter(_Record):
    type: str
    name: str | None = Field(None, description="Absent for a bare type argument")


class FieldDescriptor(_Record):
    name: str
    modifiers: list[str] = Field(default_factory=list)
    type: str
    description: str = ""


class CallableDescriptor(_Record):
    name: str
    modifiers: list[str] = Field(default_factory=list)
    description: str = ""
    parameters: list[Parameter] | None = Field(
        None,
        serialization_alias="args",
        description="None when the signature text could not be decomposed",
    )


class ConstructorDescriptor(CallableDescriptor):
    pass


class MethodDescriptor(CallableDescriptor):
    type: str = Field("", description="Return type")


class TypeDescriptor(_Record):
    """One documented class, interface, enum, annotation or record."""

    kind: str = Field(..., serialization_alias="type")
    name: str
    package_name: str = Field("", serialization_alias="package")
    module_name: str = Field("", serialization_alias="module")
    extends_types: list[str] | None = Field(None, serialization_alias="extends")
    implements_types: list[str] | None = Field(None, serialization_alias="implements")
    fields: list[FieldDescriptor] = Field(default_factory=list)
    constructors: list[ConstructorDescriptor] = Field(default_factory=list)
    methods: list[MethodDescriptor] = Field(default_factory=list)

    @property
    def qualified_name(self) -> str:
        if self.package_name:
            return f"{self.package_name}.{self.name}"
        return self.name
