from enum import Enum
from pathlib import Path
from typing import Annotated, Generic, Literal, TypeVar

from beartype import beartype
from pydantic import BaseModel, GetCoreSchemaHandler
from pydantic_core import core_schema


class Validator:
  """Base class for all field validators."""
  description: str


class Int(Validator):
  def __init__(self, range: tuple[int, int], description: str):
    self.range = range
    self.description = description

  def __get_pydantic_core_schema__(self, _source_type, _handler: GetCoreSchemaHandler):
    def validate(v: int):
      v = int(v)
      if not (self.range[0] <= v <= self.range[1]):
        raise ValueError(f"{v} not in [{self.range[0]}, {self.range[1]}]")
      return v
    return core_schema.no_info_plain_validator_function(validate)


TEnum = TypeVar('TEnum', bound=Enum)


class EnumValidator(Validator, Generic[TEnum]):
  def __init__(self, enum_type: type[TEnum], description: str):
    self.enum_type = enum_type
    self.description = description

  def __get_pydantic_core_schema__(self, _source_type, _handler: GetCoreSchemaHandler):
    def validate(v):
      if isinstance(v, self.enum_type):
        return v
      if isinstance(v, str) and v in self.enum_type.__members__:
        return self.enum_type[v]
      raise ValueError(f"{v} is not a {self.enum_type.__name__}")

    return core_schema.no_info_plain_validator_function(
      validate,
      serialization=core_schema.plain_serializer_function_ser_schema(lambda v: v.name, when_used='always')
    )


class Demosaicer(Enum):
  sequential = 0
  parallel = 1


class CfaSettings(BaseModel, frozen=True):
  type: Literal['cfa_settings'] = 'cfa_settings'

  demosaic: Annotated[Demosaicer, EnumValidator(Demosaicer, description='Demosaic algorithm')] = Demosaicer.parallel

  # 0 keeps torch's intra-op pool size (parallel only)
  num_threads: Annotated[int, Int(range=(0, 256), description='Demosaic threads')] = 0

  @beartype
  def save_json(self, path: Path) -> None:
    """Save settings to a JSON file."""
    path.write_text(self.model_dump_json(indent=2))

  @classmethod
  @beartype
  def load_json(cls, path: Path) -> 'CfaSettings':
    """Load settings from a JSON file."""
    return cls.model_validate_json(path.read_text())
