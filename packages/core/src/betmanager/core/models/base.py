"""模型基类 -- camelCase 别名

持久化 bucket 与 HTTP JSON 使用 camelCase（taskIdSource、pixKeyInfo ...），
Python 侧使用 snake_case；两种写法在输入时都被接受。
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase 别名基类"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
