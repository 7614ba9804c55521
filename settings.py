from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Server configuration
PORT = config.get("PORT", 8081)
LOG_LEVEL = config.get("LOG_LEVEL", "info")
BIND_ADDRESS = config.get("BIND_ADDRESS", "127.0.0.1")

# Upstream endpoints
ANTHROPIC_API_URL = config.get("ANTHROPIC_API_URL", "https://api.anthropic.com/v1/messages")
OPENAI_API_URL = config.get("OPENAI_API_URL", "https://api.openai.com/v1/chat/completions")
ANTHROPIC_VERSION = "2023-06-01"

# Timeout configuration
# Connection timeout: Time to establish TCP connection
CONNECT_TIMEOUT = config.get("CONNECT_TIMEOUT", 10.0)
# Read timeout: Time between receiving data chunks, important for detecting stalled streams
READ_TIMEOUT = config.get("READ_TIMEOUT", 60.0)
# Stream timeout: Total timeout for streaming requests (LLMs can take longer)
STREAM_TIMEOUT = config.get("STREAM_TIMEOUT", 600.0)

# Frame buffer compaction (characters of consumed text kept before reslicing)
FRAME_COMPACT_THRESHOLD = config.get("FRAME_COMPACT_THRESHOLD", 8192)

# Stream tracing / debugging
STREAM_TRACE_ENABLED = config.get("STREAM_TRACE_ENABLED", False)
STREAM_TRACE_DIR = config.get("STREAM_TRACE_DIR", "stream_traces")
STREAM_TRACE_MAX_BYTES = config.get("STREAM_TRACE_MAX_BYTES", 262144)
