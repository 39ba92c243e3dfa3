"""
配置加载

从 TOML / JSON / YAML 文件读取解析上下文。
"""

import json
from pathlib import Path
from typing import Union

import toml
import yaml

from packfetch.exceptions import ConfigError
from packfetch.models import ResolutionContext


def load_config(config_path: Union[str, Path]) -> dict:
    """加载配置文件"""
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"配置文件不存在: {config_path}")

    suffix = path.suffix.lower()

    try:
        if suffix == ".toml":
            data = toml.load(path)
        elif suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        else:
            raise ConfigError(f"不支持的配置文件格式: {suffix}")
    except (toml.TomlDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(
            f"配置文件解析失败: {config_path}", context={"path": str(path)}, cause=e
        ) from e

    if not isinstance(data, dict):
        raise ConfigError(f"配置文件内容必须是表: {config_path}")
    return data


def load_context(config_path: Union[str, Path]) -> ResolutionContext:
    """
    从配置文件创建解析上下文

    配置项可以直接放在顶层，也可以放在 [resolver] 表中。
    """
    data = load_config(config_path)
    section = data.get("resolver", data)
    if not isinstance(section, dict):
        raise ConfigError("resolver 配置必须是表")
    return ResolutionContext.from_dict(section)
