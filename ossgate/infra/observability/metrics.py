from prometheus_client import Counter, Histogram, make_asgi_app

# 低基数标签：使用路由模板（如 /api/v1/oss/{store_name}/object），避免动态参数导致高基数
REQUESTS = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "route", "status"],
)

LATENCY = Histogram(
    "http_request_duration_seconds",
    "Request latency in seconds",
    ["method", "route"],
)

# 后端调用：operation 为 boto3 方法名，outcome 为 ok / error
STORAGE_OPERATIONS = Counter(
    "oss_operations_total",
    "Object storage backend calls",
    ["operation", "outcome"],
)

STORAGE_LATENCY = Histogram(
    "oss_operation_duration_seconds",
    "Object storage backend call latency in seconds",
    ["operation"],
)

# /metrics 端点 ASGI 应用
metrics_app = make_asgi_app()
