from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, conint

U32_MAX = 2**32 - 1


class TodoItem(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    id: str
    title: str
    status: str
    folder_name: str

    @classmethod
    def from_dict(cls, data: Any) -> "TodoItem":
        return cls.model_validate(data)

    def to_dict(self) -> Dict:
        return self.model_dump()


class AppConfig(BaseModel):
    """
    Application settings as stored in config.json.
    Unknown keys are ignored, launch_at_login may be absent,
    everything else is required and must have the exact JSON type.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    data_path: str
    language: str
    theme: str
    font_family: str
    font_size: conint(ge=0, le=U32_MAX)
    text_color_light: str
    text_color_dark: str
    launch_at_login: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "AppConfig":
        return cls.model_validate(data)

    @classmethod
    def default(cls, data_path: str) -> "AppConfig":
        return cls(
            data_path=data_path,
            language="zh-CN",
            theme="light",
            font_family="Arial",
            font_size=14,
            text_color_light="#333333",
            text_color_dark="#e5e5e5",
            launch_at_login=False,
        )

    def to_dict(self) -> Dict:
        return self.model_dump()
