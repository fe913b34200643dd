"""Prometheus text exposition format (0.0.4) encoder."""

from collections.abc import Iterable, Sequence

from countryinfo.core.metrics import REQUEST_METRICS, MetricDefinition
from countryinfo.core.models import MetricSample

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

_HISTOGRAM_SUFFIXES = ("_bucket", "_sum", "_count")


def _escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def format_value(value: float) -> str:
    """Format a sample value; whole numbers drop the trailing ``.0``."""
    if value != value:
        return "NaN"
    if value in (float("inf"), float("-inf")):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_sample(sample: MetricSample) -> str:
    """Format one sample line: ``name{label="value",...} value``."""
    if not sample.labels:
        return f"{sample.name} {format_value(sample.value)}"
    labels = ",".join(
        f'{key}="{_escape_label_value(value)}"' for key, value in sample.labels.items()
    )
    return f"{sample.name}{{{labels}}} {format_value(sample.value)}"


def _family_of(sample_name: str, definitions: dict[str, MetricDefinition]) -> str:
    if sample_name in definitions:
        return sample_name
    for suffix in _HISTOGRAM_SUFFIXES:
        if sample_name.endswith(suffix):
            definition = definitions.get(sample_name[: -len(suffix)])
            if definition is not None and definition.kind == "histogram":
                return definition.name
    return sample_name


def encode_metrics(
    samples: Iterable[MetricSample],
    definitions: Sequence[MetricDefinition] = REQUEST_METRICS,
) -> str:
    """Encode aggregated samples to Prometheus text format.

    Families with a definition get ``# HELP`` and ``# TYPE`` lines and are
    written in definition order. Families without one are written last as
    ``untyped``. Families with no samples are still announced, so a fresh
    registry exposes its metric names.

    Args:
        samples: One sample per series, holding the series' current value.
        definitions: Known metric families.

    Returns:
        Exposition text ending with a newline.
    """
    by_name = {definition.name: definition for definition in definitions}
    families: dict[str, list[MetricSample]] = {d.name: [] for d in definitions}
    for sample in samples:
        families.setdefault(_family_of(sample.name, by_name), []).append(sample)

    lines: list[str] = []
    for family, family_samples in families.items():
        definition = by_name.get(family)
        if definition is not None:
            lines.append(f"# HELP {family} {_escape_help(definition.help)}")
            lines.append(f"# TYPE {family} {definition.kind}")
        else:
            lines.append(f"# TYPE {family} untyped")
        lines.extend(format_sample(sample) for sample in family_samples)

    return "\n".join(lines) + "\n"
