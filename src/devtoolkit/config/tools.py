from typing import Dict, Any, List

from .settings import is_tool_enabled

# Store for tools configuration
TOOLS = [
    {
        "id": "json-tool",
        "name": "JSON Tool",
        "description": "Format, validate, and minify JSON data",
        "path": "/api/text/json",
        "tags": ["formatter", "json", "validator"],
        "category": "text",
        "icon": "📄"
    },
    {
        "id": "base64",
        "name": "Base64 Encoder",
        "description": "Encode and decode Base64, including the URL-safe alphabet",
        "path": "/api/text/base64",
        "tags": ["encoder", "decoder", "base64"],
        "category": "text",
        "icon": "🔤"
    },
    {
        "id": "url-encoder",
        "name": "URL Encoder",
        "description": "Percent-encode and decode URL components",
        "path": "/api/text/url",
        "tags": ["encoder", "decoder", "url"],
        "category": "text",
        "icon": "🔗"
    },
    {
        "id": "html-entities",
        "name": "HTML Entities",
        "description": "Escape and unescape HTML entities",
        "path": "/api/text/html",
        "tags": ["encoder", "decoder", "html"],
        "category": "text",
        "icon": "🏷️"
    },
    {
        "id": "string-escape",
        "name": "String Escape",
        "description": "Escape and unescape strings for JSON, HTML, URL, regex, SQL, shell, and CSV",
        "path": "/api/text/escape",
        "tags": ["escape", "string", "sql", "shell", "regex"],
        "category": "text",
        "icon": "🛡️"
    },
    {
        "id": "case-converter",
        "name": "Case Converter",
        "description": "Convert text between camelCase, snake_case, kebab-case and more",
        "path": "/api/text/case",
        "tags": ["case", "camel", "snake", "kebab"],
        "category": "text",
        "icon": "🔠"
    },
    {
        "id": "slug-generator",
        "name": "Slug Generator",
        "description": "Generate URL, file name, and anchor slugs",
        "path": "/api/text/slug",
        "tags": ["slug", "url", "seo"],
        "category": "text",
        "icon": "🐌"
    },
    {
        "id": "word-counter",
        "name": "Word Counter",
        "description": "Count characters, words, sentences, and reading time",
        "path": "/api/text/count",
        "tags": ["count", "words", "text"],
        "category": "text",
        "icon": "🔢"
    },
    {
        "id": "lorem-ipsum",
        "name": "Lorem Ipsum Generator",
        "description": "Generate placeholder words, sentences, or paragraphs",
        "path": "/api/text/lorem",
        "tags": ["lorem", "placeholder", "generator"],
        "category": "text",
        "icon": "📜"
    },
    {
        "id": "list-sorter",
        "name": "List Sorter & Deduplicator",
        "description": "Sort lists alphabetically, numerically, by length, or naturally and remove duplicates",
        "path": "/api/lists/process",
        "tags": ["sort", "dedupe", "list", "natural"],
        "category": "text",
        "icon": "📑"
    },
    {
        "id": "json-yaml-converter",
        "name": "JSON-YAML Converter",
        "description": "Bidirectional conversion between JSON and YAML",
        "path": "/api/convert",
        "tags": ["converter", "json", "yaml", "format"],
        "category": "formats",
        "icon": "🔄"
    },
    {
        "id": "csv-json-converter",
        "name": "CSV-JSON Converter",
        "description": "Convert CSV to a JSON array of objects and back",
        "path": "/api/convert/csv",
        "tags": ["converter", "csv", "json"],
        "category": "formats",
        "icon": "📊"
    },
    {
        "id": "cron-parser",
        "name": "Cron Parser",
        "description": "Parse cron expressions with human-readable descriptions and next execution times",
        "path": "/api/cron/parse",
        "tags": ["cron", "scheduler", "parser", "time", "unix"],
        "category": "time",
        "icon": "⏰"
    },
    {
        "id": "timestamp-converter",
        "name": "Timestamp Converter",
        "description": "Convert between Unix timestamps and dates with relative time",
        "path": "/api/timestamp/convert",
        "tags": ["timestamp", "unix", "date", "time"],
        "category": "time",
        "icon": "🕐"
    },
    {
        "id": "regex-tester",
        "name": "Regex Tester",
        "description": "Test regular expressions with match details, groups, and explanations",
        "path": "/api/regex/test",
        "tags": ["regex", "pattern", "match", "test"],
        "category": "text",
        "icon": "🔍"
    },
    {
        "id": "text-diff",
        "name": "Text Diff Tool",
        "description": "Compare two texts by lines, words, or characters",
        "path": "/api/text-diff/compare",
        "tags": ["diff", "compare", "text"],
        "category": "text",
        "icon": "⚖️"
    },
    {
        "id": "html-css-validator",
        "name": "HTML/CSS Validator",
        "description": "Flag deprecated markup, accessibility gaps, and unbalanced CSS with line numbers",
        "path": "/api/validator/check",
        "tags": ["html", "css", "validator", "lint"],
        "category": "text",
        "icon": "✅"
    },
    {
        "id": "uuid-generator",
        "name": "UUID Generator",
        "description": "Generate v4 UUIDs in several formats",
        "path": "/api/generate/uuid",
        "tags": ["uuid", "guid", "generator"],
        "category": "generators",
        "icon": "🆔"
    },
    {
        "id": "password-generator",
        "name": "Password Generator",
        "description": "Generate strong passwords and estimate their entropy",
        "path": "/api/generate/password",
        "tags": ["password", "security", "generator", "entropy"],
        "category": "generators",
        "icon": "🔑"
    },
    {
        "id": "hash-generator",
        "name": "Hash Generator",
        "description": "MD5, SHA-1, SHA-256, and SHA-512 digests of text",
        "path": "/api/security/hash",
        "tags": ["hash", "md5", "sha", "checksum"],
        "category": "security",
        "icon": "#️⃣"
    },
    {
        "id": "hmac-generator",
        "name": "HMAC Generator",
        "description": "Keyed message authentication codes with SHA algorithms",
        "path": "/api/security/hmac",
        "tags": ["hmac", "sha", "signature"],
        "category": "security",
        "icon": "✍️"
    },
    {
        "id": "jwt-decoder",
        "name": "JWT Debugger",
        "description": "Decode JWTs, inspect expiry, and verify signatures",
        "path": "/api/security/jwt/decode",
        "tags": ["jwt", "decoder", "token", "security", "auth"],
        "category": "security",
        "icon": "🔐"
    },
    {
        "id": "url-parser",
        "name": "URL Parser",
        "description": "Break a URL into protocol, host, path, query parameters, and fragment",
        "path": "/api/network/url",
        "tags": ["url", "parser", "query"],
        "category": "network",
        "icon": "🧭"
    },
    {
        "id": "http-status",
        "name": "HTTP Status Reference",
        "description": "Searchable reference of HTTP status codes",
        "path": "/api/network/http-status",
        "tags": ["http", "status", "reference"],
        "category": "network",
        "icon": "📖"
    },
    {
        "id": "user-agent-parser",
        "name": "User Agent Parser",
        "description": "Identify browser, OS, and device from a user agent string",
        "path": "/api/network/user-agent",
        "tags": ["user-agent", "browser", "device"],
        "category": "network",
        "icon": "🕵️"
    },
    {
        "id": "ip-tool",
        "name": "IP Address Tool",
        "description": "Analyze IPv4 and IPv6 addresses and CIDR ranges",
        "path": "/api/network/ip",
        "tags": ["ip", "ipv4", "ipv6", "cidr"],
        "category": "network",
        "icon": "🌐"
    },
    {
        "id": "number-base",
        "name": "Number Base Converter",
        "description": "Convert numbers between binary, octal, decimal, and hexadecimal",
        "path": "/api/numbers/base",
        "tags": ["binary", "hex", "octal", "converter"],
        "category": "numbers",
        "icon": "🔟"
    },
    {
        "id": "byte-size",
        "name": "Byte Size Converter",
        "description": "Convert between decimal and binary byte units",
        "path": "/api/numbers/bytes",
        "tags": ["bytes", "kib", "mb", "converter"],
        "category": "numbers",
        "icon": "💾"
    },
    {
        "id": "domain-tools",
        "name": "Domain Tools",
        "description": "DNS lookup and propagation, WHOIS, SSL, headers, redirects, dead links, and favicons",
        "path": "/api/domain/dns",
        "tags": ["dns", "whois", "ssl", "headers", "redirects", "links", "favicon"],
        "category": "domain",
        "icon": "🛰️"
    },
    {
        "id": "homebrew",
        "name": "Homebrew Manager",
        "description": "Search, install, upgrade, and inspect Homebrew packages and taps",
        "path": "/api/brew/status",
        "tags": ["homebrew", "brew", "packages", "macos"],
        "category": "system",
        "icon": "🍺"
    },
    {
        "id": "overwatch",
        "name": "Overwatch",
        "description": "Status dashboard for Railway, Plausible, Netlify, and Sentry services",
        "path": "/api/overwatch/services",
        "tags": ["status", "monitoring", "railway", "netlify", "sentry", "plausible"],
        "category": "monitoring",
        "icon": "📡"
    },
]


def get_enabled_tools(tools_list: List[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """Filter tools list to only include enabled tools."""
    if tools_list is None:
        tools_list = TOOLS
    return [tool for tool in tools_list if is_tool_enabled(tool.get('id', ''))]
