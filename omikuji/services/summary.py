from __future__ import annotations

from ..models.load_result import LoadResult

"""Summary line rendering for a dataset load."""


def render_summary_line(result: LoadResult) -> str:
    """Render a SUMMARY line from LoadResult.

    Format:
    SUMMARY fortunes={n} rows={rows} blank={blank} invalid={invalid}
    header={ok|missing} found={yes|no} source={source}

    Examples:
        >>> r = LoadResult(source="data/fortunes.csv", found=False)
        >>> render_summary_line(r)
        'SUMMARY fortunes=0 rows=0 blank=0 invalid=0 header=ok found=no source=data/fortunes.csv'
    """
    return (
        f"SUMMARY fortunes={len(result.fortunes)} "
        f"rows={result.total_rows} "
        f"blank={result.blank_rows} "
        f"invalid={result.invalid_rows} "
        f"header={'ok' if result.header_valid else 'missing'} "
        f"found={'yes' if result.found else 'no'} "
        f"source={result.source}"
    )
