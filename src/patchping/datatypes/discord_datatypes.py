"""
Type-safe wrapper classes for Discord identifiers.

Discord snowflakes are 64-bit integers but show up as strings in YAML config
and JSON payloads. The wrappers here normalise both forms so that a guild id
read from the config file compares equal to ``guild.id`` from the gateway.
"""

from __future__ import annotations

from typing import Union


class _Snowflake:
    """
    Common base for snowflake wrappers.

    Attributes:
        _value (str): The snowflake stored as a canonical decimal string.

    Example:
        >>> gid = GuildID("434511133383065620")
        >>> gid.to_int()
        434511133383065620
        >>> gid == 434511133383065620
        True
    """

    __slots__ = ("_value",)

    def __init__(self, value: Union[str, int, "_Snowflake"]) -> None:
        """
        Initialize from a string, int, or another wrapper of the same kind.

        Raises:
            ValueError: If the value cannot be converted to a valid snowflake.
        """
        if isinstance(value, _Snowflake):
            self._value = value._value
        elif isinstance(value, bool):
            raise ValueError(f"Cannot create {type(self).__name__} from bool: {value}")
        elif isinstance(value, int):
            if value < 0:
                raise ValueError(f"Snowflake must be non-negative, got {value}")
            self._value = str(value)
        elif isinstance(value, str):
            self._value = str(int(value.strip()))
        else:
            raise ValueError(f"Cannot create {type(self).__name__} from {type(value).__name__}: {value}")

    def to_int(self) -> int:
        """Return the snowflake as an integer for Discord API calls."""
        return int(self._value)

    def __int__(self) -> int:
        return int(self._value)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, _Snowflake):
            return type(self) is type(other) and self._value == other._value
        if isinstance(other, str):
            return self._value == other
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)


class UserID(_Snowflake):
    """Snowflake of a Discord user or guild member."""

    __slots__ = ()

    @classmethod
    def from_user(cls, member) -> "UserID":
        """Create a UserID from a ``discord.Member`` or ``discord.User``."""
        return cls(member.id)


class GuildID(_Snowflake):
    """Snowflake of a Discord guild."""

    __slots__ = ()

    @classmethod
    def from_guild(cls, guild) -> "GuildID":
        """Create a GuildID from a ``discord.Guild``."""
        return cls(guild.id)


class ChannelID(_Snowflake):
    """Snowflake of a Discord channel."""

    __slots__ = ()
