"""Claude-backed text generation: parody rewrites and the shared writer base."""

from parody.services.rewriting.base_writer import BaseLLMWriter
from parody.services.rewriting.json_utils import as_text_list, parse_json_object
from parody.services.rewriting.rewriter import ContentRewriter, identity_rewrite

__all__ = [
    "BaseLLMWriter",
    "ContentRewriter",
    "as_text_list",
    "identity_rewrite",
    "parse_json_object",
]
