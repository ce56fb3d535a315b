"""Constants and configuration for originscan."""

# Scan settings (fixed, not runtime-configurable)
MAX_CONCURRENCY = 50        # Worker slots in the probe pool
NETWORK_TIMEOUT = 3.0       # Per-attempt connect/read/write timeout (seconds)
LOCATION_TIMEOUT = 5.0      # Per-endpoint timeout for region detection
DATASET_TIMEOUT = 30.0      # Candidate dataset download timeout

# Output defaults
DEFAULT_LIMIT = 10
DEFAULT_REGION = "US"

# Latency color thresholds (milliseconds)
FAST_THRESHOLD_MS = 150.0   # Green: <= 150ms
MEDIUM_THRESHOLD_MS = 500.0  # Yellow: <= 500ms
# Red: > 500ms

# Region detection via Cloudflare trace endpoints (key=value text bodies)
TRACE_URLS = [
    "https://www.qualcomm.cn/cdn-cgi/trace",
    "https://www.prologis.cn/cdn-cgi/trace",
    "https://www.autodesk.com.cn/cdn-cgi/trace",
]

# Candidate host dataset
DATASET_URL = (
    "https://raw.githubusercontent.com/Hipo/university-domains-list/"
    "master/world_universities_and_domains.json"
)

# IPv4 reachability precheck target
IPV4_PROBE_HOST = "8.8.8.8"
IPV4_PROBE_PORT = 443
IPV4_PROBE_TIMEOUT = 5.0

# Desktop browser user agent for all outbound requests
SPOOFED_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Server header substrings that indicate an edge/CDN layer.
# Checked before ORIGIN_KEYWORDS, so a match here always wins.
CDN_KEYWORDS = [
    "cloudflare",
    "akamai",
    "fastly",
    "cloudfront",
    "azure",
    "vercel",
    "netlify",
    "cdn",
    "gws",
    "imperva",
    "sucuri",
]

# Server header substrings of common web server software
ORIGIN_KEYWORDS = [
    "nginx",
    "apache",
    "openresty",
    "microsoft-iis",
    "litespeed",
    "caddy",
    "jetty",
    "tomcat",
    "envoy",
]

# Display truncation widths
NAME_WIDTH = 48
DOMAIN_WIDTH = 28
SERVER_WIDTH = 18
