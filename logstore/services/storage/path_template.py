"""
Expansion of storage path templates.

A path template is a `/`-separated string that may contain `${job.<key>}`
placeholders. Placeholders are filled from the execution context; keys the
context does not carry expand to nothing and the separator runs they leave
behind are collapsed.
"""

import re
from typing import Mapping, Optional, Union

from .interfaces import ExecutionContext

SEPARATOR = '/'
JOB_NAMESPACE = 'job'
EXECID_PLACEHOLDER = '${job.execid}'
DEFAULT_PATH_FORMAT = 'project/${job.project}/${job.execid}'

# Only the job namespace is interpreted, anything else (e.g. ${option.x}) passes through.
_PLACEHOLDER_RE = re.compile(r'\$\{' + JOB_NAMESPACE + r'\.([^\s}]+)\}')
_SEPARATOR_RUN_RE = re.compile(re.escape(SEPARATOR) + '+')

ContextLike = Union[ExecutionContext, Mapping[str, Optional[str]], None]


def _context_values(context: ContextLike) -> Mapping[str, str]:
    if context is None:
        return {}
    if isinstance(context, ExecutionContext):
        return context.as_mapping()
    return {k: str(v) for k, v in context.items() if v is not None}


def expand_path(path_format: str, context: ContextLike = None) -> str:
    """
    Expand a path template using execution context data.

    Args:
        path_format: Template such as ``project/${job.project}/${job.execid}``
        context: ExecutionContext or mapping of job values

    Returns:
        Expanded path with leading separators of the template removed and
        separator runs collapsed. A placeholder at the very start that expands
        to nothing leaves its following separator in place.
    """
    values = _context_values(context)
    result = path_format.lstrip(SEPARATOR)
    result = _PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), ''), result)
    return _SEPARATOR_RUN_RE.sub(SEPARATOR, result)


def has_execid_placeholder(path_format: str) -> bool:
    return EXECID_PLACEHOLDER in path_format
