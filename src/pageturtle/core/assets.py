"""Image reference rewriting to final published locations"""

from pathlib import PurePosixPath

from pageturtle.core.models import AssetReference
from pageturtle.core.parse import BuildContext
from pageturtle.core.utils.tokens import walk


def final_asset_path(original: str, assets_root: str) -> str:
    """Map an authored image URL to /<assets_root>/<basename>."""
    name = PurePosixPath(original.split('?', 1)[0].split('#', 1)[0]).name
    return f"/{assets_root}/{name}"


def rewrite_assets(ctx: BuildContext, handle: int) -> list[AssetReference]:
    """Rewrite every image src in the tree in place and return the copy manifest.

    Repeated references to the same file produce one entry each.
    """
    refs = []
    for tok in walk(ctx.tokens(handle)):
        if tok.type != 'image':
            continue
        original = tok.attrGet('src') or ''
        final = final_asset_path(original, ctx.assets_root)
        tok.attrSet('src', final)
        refs.append(AssetReference(original_path=original, final_path=final))
    ctx.arena.mark_rewritten(handle)
    return refs
