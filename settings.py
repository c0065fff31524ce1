import copy
import json
import logging
import os
from typing import Any, Optional

from history_errors import ValidationError

DEFAULT_SETTINGS = {
    "name": "UnnamedHistoryView",  # 视图名称，用于区分多个视图
    "current_branch": "master",  # 初始所在分支，null 表示游离 HEAD
    "width": 700,
    "height": 400,
    "commit_radius": 20,  # 决定所有间距
    "commit_data": [],  # 初始提交列表
}


class Settings:
    def __init__(self, scenario_file: Optional[str] = None):
        # 默认设置
        self.settings: dict[str, Any] = copy.deepcopy(DEFAULT_SETTINGS)
        self.scenario_file = scenario_file

        # 加载场景文件
        if scenario_file:
            self.load_settings(scenario_file)

    def load_settings(self, scenario_file: str):
        """加载场景文件"""
        self.scenario_file = scenario_file
        try:
            if os.path.exists(scenario_file):
                with open(scenario_file, "r", encoding="utf-8") as f:
                    saved_settings = json.load(f)
                    self.settings.update(saved_settings)
            else:
                logging.warning("Scenario file not found: %s", scenario_file)
        except (OSError, ValueError) as e:
            logging.warning("加载场景失败：%s", e)

    def get_name(self) -> str:
        return self.settings.get("name") or DEFAULT_SETTINGS["name"]

    def get_current_branch(self) -> Optional[str]:
        """获取初始分支，None 表示游离 HEAD"""
        return self.settings.get("current_branch")

    def get_width(self) -> float:
        return self.settings.get("width", DEFAULT_SETTINGS["width"])

    def get_height(self) -> float:
        return self.settings.get("height", DEFAULT_SETTINGS["height"])

    def get_commit_radius(self) -> float:
        return self.settings.get("commit_radius", DEFAULT_SETTINGS["commit_radius"])

    def get_commit_data(self) -> list[dict]:
        """获取初始提交列表（副本）"""
        return copy.deepcopy(self.settings.get("commit_data") or [])

    def view_config(self) -> dict[str, Any]:
        """The keyword arguments a HistoryModel is built from."""
        for key in ("width", "height", "commit_radius"):
            value = self.settings.get(key)
            if not isinstance(value, (int, float)) or value <= 0:
                raise ValidationError(f"Setting '{key}' must be a positive number, got {value!r}.")

        return {
            "commit_data": self.get_commit_data(),
            "name": self.get_name(),
            "current_branch": self.get_current_branch(),
            "width": self.get_width(),
            "height": self.get_height(),
            "commit_radius": self.get_commit_radius(),
        }


# 创建全局settings实例
settings = Settings(os.getenv("HISTORY_SCENARIO"))
