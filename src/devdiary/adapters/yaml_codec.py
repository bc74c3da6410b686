import io
import re
from typing import Any

import yaml

_FM = re.compile(r"^\s*---\s*\n(.*?)\n---\s*\n?", re.DOTALL)


class YamlFrontmatter:
    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        m = _FM.match(text)
        if not m:
            return {}, text
        try:
            fm = yaml.safe_load(io.StringIO(m.group(1))) or {}
        except yaml.YAMLError:
            # Not frontmatter after all (e.g. a horizontal rule); keep the text
            return {}, text
        if not isinstance(fm, dict):
            return {}, text
        body = text[m.end() :]
        return (fm, body)
