"""Entry file synthesis.

Pages always load `<module>.entry.mjs`, which imports the bundle next to it
and calls its `main` export only when the module defines one.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from ..output import log_artifact

BUNDLE_EXT = ".mjs"


@dataclass(frozen=True)
class EntryFile:
    """A launcher module for one bundle."""

    base_name: str
    content: str
    ext: str = BUNDLE_EXT

    @property
    def file_name(self) -> str:
        return f"{self.base_name}.entry{self.ext}"

    def path(self, out_dir: Path) -> Path:
        return out_dir / self.file_name


def entry_source(base_name: str, ext: str = BUNDLE_EXT) -> str:
    return f"import {{ main }} from './{base_name}{ext}'; main?.();"


class EntrySynthesizer:
    """Writes one entry file per bundled module."""

    def __init__(self, ext: str = BUNDLE_EXT):
        self.ext = ext

    def entry_for(self, module: Path) -> EntryFile:
        base_name = module.name[: -len(self.ext)] if module.name.endswith(self.ext) else module.stem
        return EntryFile(base_name=base_name, content=entry_source(base_name, self.ext), ext=self.ext)

    def write_entries(self, modules: Sequence[Path], out_dir: Path) -> List[Path]:
        """Write entry files for the bundled modules.

        Args:
            modules: Compiled module paths (their bundles live in out_dir)
            out_dir: Bundle output directory

        Returns:
            Paths of the written entry files, in module order
        """
        written = []
        for module in modules:
            entry = self.entry_for(module)
            path = entry.path(out_dir)
            path.write_text(entry.content, encoding="utf-8")
            log_artifact("entry", path)
            written.append(path)
        return written
