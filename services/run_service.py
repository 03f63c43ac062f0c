from domain.errors import CopyError, ValidationError
from domain.models import CopyConfig, TransferOutcome, TransferRequest
from services.report_service import ReportService
from services.stream_copier import StreamCopier


class TransferRunner:
    """Validate -> copy -> report -> verify, folded into a TransferOutcome."""

    def __init__(self, logger, config: CopyConfig | None = None):
        self.logger = logger
        self.copier = StreamCopier(logger, config)
        self.reporter = ReportService(logger)

    def run(self, request: TransferRequest, stop_flag=None, progress_cb=None) -> TransferOutcome:
        try:
            self.copier.validate(request)
        except ValidationError as e:
            self.logger.error(f"Validation failed: {e}")
            self._hints(e)
            return TransferOutcome(ok=False, error=e)

        try:
            stats = self.copier.copy(request, stop_flag=stop_flag, progress_cb=progress_cb)
        except CopyError as e:
            report = self.reporter.produce(e.stats) if e.stats is not None else None
            self._hints(e)
            return TransferOutcome(ok=False, stats=e.stats, report=report, error=e)

        report = self.reporter.produce(stats)
        verify = self.copier.verify(request)
        ok = verify.match and not stats.interrupted
        return TransferOutcome(ok=ok, stats=stats, report=report, verify=verify)

    def _hints(self, err):
        for hint in err.hints:
            self.logger.error(f"  hint: {hint}")
