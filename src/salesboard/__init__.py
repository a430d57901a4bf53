"""SalesBoard -- 销售任务 ROI 追踪"""

__version__ = "0.1.0"
