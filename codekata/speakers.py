"""Duck-typed speakers, runtime type inspection and a greeting."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Speaker(Protocol):
    """Anything that can say something."""

    def speak(self) -> str:
        """Return what the speaker says."""
        raise NotImplementedError


class Dog:
    def speak(self):
        return "Woof!"


class Cat:
    def speak(self):
        return "Meow!"


@dataclass
class Brand:
    brand_id: str
    brand_name: str


@dataclass
class SportEvent:
    event_id: int
    event_name: str


@dataclass
class EmptyMarket:
    pass


# bool must come before int, since bool is a subclass of int.
_TYPE_LABELS = (
    (bool, "bool"),
    (int, "int"),
    (str, "string"),
    (float, "float64"),
    (Brand, "Brand"),
    (SportEvent, "Event"),
)


def make_it_speak(speaker):
    """Print and return what ``speaker`` says."""
    words = speaker.speak()
    print(words)
    return words


def print_anything(value):
    """Print any value and return the text printed."""
    text = str(value)
    print(text)
    return text


def describe_type(value):
    """Print and return a line naming the kind of ``value``."""
    line = next(
        (f"b type is {label}" for kind, label in _TYPE_LABELS if isinstance(value, kind)),
        "Unknown Type",
    )
    print(line)
    return line


def type_assertion(value):
    """Require ``value`` to be a string; print and return a line describing it."""
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    print("String str is :", value)
    line = f"It's a string: {value}"
    print(line)
    return line


def reflect_demo():
    """Describe a brand, an event and a market; return the three lines."""
    return [
        describe_type(Brand(brand_id="beebet", brand_name="Project Yankee")),
        describe_type(SportEvent(event_id=123, event_name="Ind Vs Aus")),
        describe_type(EmptyMarket()),
    ]


def hello(name):
    """Print and return a greeting for ``name``."""
    line = f"Hello, {name}"
    print(line)
    return line