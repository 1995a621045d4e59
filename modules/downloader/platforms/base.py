"""
基础平台类

定义所有平台处理器的通用接口：域名匹配、上游端点以及响应规范化
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import logging

from ..errors import NormalizerFailure
from ..models import Platform, PlatformRule, NormalizedResult

logger = logging.getLogger(__name__)

UNTITLED = '(Untitled)'


class BasePlatform(ABC):
    """基础平台类"""

    platform: Platform = None

    def __init__(self):
        self.name = self.platform.value if self.platform else self.__class__.__name__.replace('Platform', '')
        self.supported_domains: List[str] = []
        self.endpoint = ''

    @abstractmethod
    def normalize(self, payload: Dict[str, Any]) -> NormalizedResult:
        """把上游 JSON 转换为统一结构，失败时抛出 NormalizerFailure"""
        pass

    @property
    def rule(self) -> PlatformRule:
        return PlatformRule(
            match_domains=tuple(self.supported_domains),
            platform=self.platform,
            endpoint=self.endpoint,
        )

    def is_supported(self, url: str) -> bool:
        """检查是否支持该 URL（子串匹配）"""
        return self.rule.matches(url)

    def fail(self, reason: str):
        logger.warning(f"⚠️ {self.name} 响应解析失败: {reason}")
        raise NormalizerFailure(reason)

    @staticmethod
    def dig(data: Any, *path: str) -> Optional[Any]:
        """安全地读取嵌套字段，任一层缺失时返回 None"""
        current = data
        for key in path:
            if not isinstance(current, dict):
                return None
            current = current.get(key)
        return current

    def root(self, payload: Any, key: str, reason: str) -> Dict[str, Any]:
        """读取对象类型的根字段，不存在、为空或不是对象时失败"""
        value = self.dig(payload, key)
        if not value or not isinstance(value, dict):
            self.fail(reason)
        return value

    def __str__(self):
        return f"{self.name}Platform"

    def __repr__(self):
        return f"<{self.__class__.__name__} domains={self.supported_domains}>"
