# -*- coding: utf-8 -*-
"""
日志配置模块 - 统一日志管理

日志级别和文件名来自配置（LOG_LEVEL / LOG_FILE 环境变量优先），
所有处理器都挂载密钥过滤器，确保下载 API Key 不会出现在日志中
"""

import os
import logging
import logging.handlers
from pathlib import Path
from typing import Iterable, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
MASK = '***'


class SecretRedactionFilter(logging.Filter):
    """把日志消息中的密钥替换为 ***"""

    def __init__(self, secrets: Iterable[str] = ()):
        super().__init__()
        self.secrets = [s for s in secrets if s]

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True
        message = record.getMessage()
        redacted = message
        for secret in self.secrets:
            redacted = redacted.replace(secret, MASK)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


class LoggingConfig:
    """日志配置管理器"""

    def __init__(self, log_dir: str = "data/logs"):
        self.log_dir = Path(log_dir)

    def setup_logging(self,
                      level: str = "INFO",
                      log_file: Optional[str] = None,
                      max_size: int = 10 * 1024 * 1024,  # 10MB
                      backup_count: int = 5,
                      console_output: bool = True,
                      secrets: Iterable[str] = ()) -> None:
        """设置日志配置"""

        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        log_level = getattr(logging, str(level).upper(), logging.INFO)
        root_logger.setLevel(log_level)

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        redaction = SecretRedactionFilter(secrets)

        handlers = []
        if console_output:
            handlers.append(logging.StreamHandler())

        if log_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.handlers.RotatingFileHandler(
                self.log_dir / log_file,
                maxBytes=max_size,
                backupCount=backup_count,
                encoding='utf-8'
            ))

        for handler in handlers:
            handler.setLevel(log_level)
            handler.setFormatter(formatter)
            handler.addFilter(redaction)
            root_logger.addHandler(handler)

        self._configure_third_party_loggers()

        logging.info(f"📝 日志系统初始化完成 - 级别: {logging.getLevelName(log_level)}, 文件: {log_file or '-'}")

    def _configure_third_party_loggers(self):
        """上游请求和开发服务器的日志只保留警告以上"""
        for logger_name in ('urllib3', 'requests', 'werkzeug'):
            logging.getLogger(logger_name).setLevel(logging.WARNING)


# 全局日志配置实例
_logging_config = None


def get_logging_config() -> LoggingConfig:
    """获取日志配置实例"""
    global _logging_config
    if _logging_config is None:
        from .config import get_config
        _logging_config = LoggingConfig(get_config('logging.dir', 'data/logs'))
    return _logging_config


def _running_in_container() -> bool:
    return bool(os.environ.get('DOCKER_CONTAINER')) or os.path.exists('/.dockerenv')


def setup_application_logging() -> bool:
    """设置应用日志，容器中默认只输出到控制台"""
    from .config import get_config

    level = get_config('logging.level', 'INFO')
    log_file = get_config('logging.file', 'app.log') or None
    if _running_in_container() and not get_config('logging.file_in_container', False):
        log_file = None

    api_key = (get_config('downloader.api_key', '') or '').strip()

    try:
        get_logging_config().setup_logging(level=level, log_file=log_file, secrets=[api_key])
        return True
    except OSError as e:
        # 日志目录不可写时退回基本配置
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logging.error(f"❌ 日志配置失败，使用基本配置: {e}")
        return False
