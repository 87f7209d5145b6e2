from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    Declares one environment setting a client reads on construction.

    Attributes:
        env_key (str): The raw key; the client prefixes it with "<CLIENT_TYPE>_<ENGINE>_".
        val_type (str): One of "string", "number", "bool" and "list".
        default (str | int | float | bool | list | None): Value used when the variable is unset.
            None marks the setting as required.
    """

    env_key: str
    val_type: str = "string"
    default: str | int | float | bool | list | None = None