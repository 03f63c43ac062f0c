from domain.constants import COPY_PHASES, PHASE_COPY
from domain.models import PerformanceReport, TransferStats
from services.stream_copier import throughput


class ReportService:
    def __init__(self, logger):
        self.logger = logger

    def build(self, stats: TransferStats) -> PerformanceReport:
        total_ms = max(0.0, (stats.ended_at - stats.started_at) * 1000.0)
        phase_ms = {p: stats.phase_durations.get(p, 0.0) * 1000.0 for p in COPY_PHASES}
        efficiency = phase_ms[PHASE_COPY] / total_ms if total_ms > 0 else 0.0
        return PerformanceReport(
            total_ms=total_ms,
            phase_ms=phase_ms,
            average_bytes_per_sec=throughput(stats.bytes_copied, total_ms),
            efficiency=efficiency,
        )

    def render(self, stats: TransferStats, report: PerformanceReport) -> list[str]:
        lines = []
        lines.append("Performance report")
        lines.append(f"- Bytes copied: {stats.bytes_copied} of {stats.source_size}")
        if stats.units_copied != stats.bytes_copied:
            lines.append(f"- Characters copied: {stats.units_copied}")
        if stats.interrupted:
            lines.append("- Interrupted before end of stream")
        lines.append(f"- Total time: {report.total_ms:.2f} ms")
        for p in COPY_PHASES:
            lines.append(f"  - {p}: {report.phase_ms[p]:.2f} ms")
        lines.append(f"- Average throughput: {report.average_bytes_per_sec:.1f} B/s")
        lines.append(f"- Operational efficiency: {report.efficiency:.1%}")
        return lines

    def produce(self, stats: TransferStats) -> PerformanceReport:
        report = self.build(stats)
        for line in self.render(stats, report):
            self.logger.info(line)
        return report
