"""Loader 异常体系"""


class LoaderError(Exception):
    """Loader 包基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 是否可通过降级数据源恢复
        """
        super().__init__(message)
        self.recoverable = recoverable


class SourceUnavailableError(LoaderError):
    """数据源不可达（连接失败、超时、非 2xx 响应等）

    此异常触发 TaskLoader 的降级逻辑。
    """

    def __init__(self, source_url: str, original_error: Exception | str) -> None:
        """
        Args:
            source_url: 尝试拉取的地址
            original_error: 原始异常或描述
        """
        super().__init__(
            f"任务数据源不可达: {source_url} -- {original_error}",
            recoverable=True,
        )
        self.source_url = source_url
        self.original_error = original_error


class MalformedPayloadError(LoaderError):
    """数据源返回的 payload 不是任务列表"""

    def __init__(self, message: str = "任务数据格式错误") -> None:
        super().__init__(message, recoverable=True)
