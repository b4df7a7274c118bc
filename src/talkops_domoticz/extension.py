"""Extension registration surface.

Holds what the conversational runtime reads from this extension:
- Manifest metadata (name, category, features, installation steps)
- Startup parameters (Domoticz URL and credentials)
- Published instructions and function schemas
- Callable action functions and the bootstrap hook

The poll cycle writes instructions and function schemas through the
setters; the HTTP routes read them back.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from talkops_domoticz.services.publisher import BASE_INSTRUCTIONS, DEFAULT_INSTRUCTIONS

if TYPE_CHECKING:
    from talkops_domoticz.config import DomoticzSettings

ActionFunction = Callable[..., Awaitable[str]]
Bootstrap = Callable[[], Any]

SECRET_PARAMETER_TYPES = frozenset({"password"})


@dataclass
class Parameter:
    """A startup parameter declared by the extension."""

    name: str
    description: str = ""
    default_value: str | None = None
    possible_values: list[str] = field(default_factory=list)
    type: str = "text"
    value: str | None = None

    def get_value(self) -> str | None:
        """Configured value, falling back to the default."""
        return self.value if self.value is not None else self.default_value

    @property
    def is_secret(self) -> bool:
        return self.type in SECRET_PARAMETER_TYPES

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, never exposing secret values."""
        return {
            "name": self.name,
            "description": self.description,
            "default_value": None if self.is_secret else self.default_value,
            "possible_values": self.possible_values,
            "type": self.type,
            "is_set": self.get_value() is not None,
        }


class Extension:
    """In-process view of the extension as the host runtime sees it."""

    def __init__(
        self,
        name: str,
        website: str = "",
        category: str = "",
        icon: str = "",
        features: list[str] | None = None,
        installation_steps: list[str] | None = None,
        parameters: list[Parameter] | None = None,
    ) -> None:
        self.name = name
        self.website = website
        self.category = category
        self.icon = icon
        self.features = features or []
        self.installation_steps = installation_steps or []
        self.parameters = parameters or []

        self._instructions = "\n".join([BASE_INSTRUCTIONS, DEFAULT_INSTRUCTIONS])
        self._function_schemas: list[dict[str, Any]] = []
        self._functions: dict[str, ActionFunction] = {}
        self._software_version: str | None = None
        self._bootstrap: Bootstrap | None = None

    @property
    def instructions(self) -> str:
        """Currently published instructions."""
        return self._instructions

    @property
    def function_schemas(self) -> list[dict[str, Any]]:
        """Currently published function schemas."""
        return list(self._function_schemas)

    @property
    def software_version(self) -> str | None:
        """Version of the Domoticz controller, once reported."""
        return self._software_version

    @property
    def function_names(self) -> list[str]:
        return list(self._functions)

    def get_parameter(self, name: str) -> Parameter:
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        raise KeyError(name)

    def set_instructions(self, instructions: str) -> None:
        self._instructions = instructions

    def set_function_schemas(self, schemas: list[dict[str, Any]]) -> None:
        self._function_schemas = list(schemas)

    def set_software_version(self, version: str | None) -> None:
        self._software_version = version

    def set_functions(self, functions: list[ActionFunction]) -> None:
        """Register action functions under their own names."""
        self._functions = {fn.__name__: fn for fn in functions}

    def set_bootstrap(self, bootstrap: Bootstrap) -> None:
        self._bootstrap = bootstrap

    async def bootstrap(self) -> None:
        """Run the bootstrap hook once, at startup."""
        if self._bootstrap is None:
            return
        result = self._bootstrap()
        if inspect.isawaitable(result):
            await result

    async def call_function(self, name: str, arguments: dict[str, Any]) -> str:
        """Invoke a registered action function by name.

        Raises:
            KeyError: If no function is registered under that name.
        """
        function = self._functions[name]
        return await function(**arguments)

    def manifest(self) -> dict[str, Any]:
        """Extension metadata for the host runtime."""
        return {
            "name": self.name,
            "website": self.website,
            "category": self.category,
            "icon": self.icon,
            "features": self.features,
            "installation_steps": self.installation_steps,
            "parameters": [p.to_dict() for p in self.parameters],
            "software_version": self._software_version,
        }


def create_extension(settings: DomoticzSettings | None = None) -> Extension:
    """Build the Domoticz extension, with parameter values from settings."""
    base_url = Parameter(
        name="BASE_URL",
        description="The base URL of your Domoticz server.",
        possible_values=["http://domoticz:8080", "https://domoticz.mydomain.net"],
        type="url",
    )
    username = Parameter(
        name="USERNAME",
        description="The username for authenticating with the Domoticz API.",
        default_value="admin",
    )
    password = Parameter(
        name="PASSWORD",
        description="The password related to username.",
        default_value="domoticz",
        type="password",
    )
    if settings is not None:
        base_url.value = settings.base_url
        username.value = settings.username
        password.value = settings.password

    return Extension(
        name="Domoticz",
        website="https://www.domoticz.com/",
        category="home_automation",
        icon=(
            "https://play-lh.googleusercontent.com/R9wJDHfZh-29Mlgiqn6MIlc21gUMI0gQXWfTlzru8"
            "lLpls0xUa3vSEGCeMjNE3MH6l8"
        ),
        features=[
            "Lights: Check status, turn on/off",
            "Shutters: Check status, open, close and stop",
            "Scene: Check status, enable, disable and toggle",
            "Sensors: Check status",
        ],
        installation_steps=[
            "Make sure your Domoticz version is newer than `2023.2`",
            "Open Domoticz from a web browser with admin permissions.",
            "Enable the API: `Setup → Settings → Security`",
            "Create a new user specifically for the TalkOps integration: `Setup → Users`",
            "Grant this user access to the devices you want to control by voice: `Set Devices`",
            "Set the environment variables using the credentials of the newly created user.",
        ],
        parameters=[base_url, username, password],
    )
