"""FastAPI router exposing compliance evaluation and configuration lookups."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import Depends, FastAPI, HTTPException

from .. import __version__
from ..core.calculator import ComplianceCalculator
from ..core.config import Settings, load_settings
from ..core.currency import format_threshold
from ..core.errors import ConfigurationLookupError
from ..core.messages import detailed_message, status_message
from ..core.metrics import REQUEST_LATENCY, configure_logging
from ..core.models import ComplianceResult, TransactionDescription
from ..core.registry import FieldDictionary, JurisdictionRegistry, load_field_dictionary, load_jurisdiction_table


class EvaluationResponse(ComplianceResult):
    message: str
    detail: str


def get_settings() -> Settings:
    return load_settings()


def get_registry(settings: Settings = Depends(get_settings)) -> JurisdictionRegistry:
    return load_jurisdiction_table(settings)


def get_field_dictionary(settings: Settings = Depends(get_settings)) -> FieldDictionary:
    return load_field_dictionary(settings)


def get_calculator(
    settings: Settings = Depends(get_settings),
    registry: JurisdictionRegistry = Depends(get_registry),
) -> ComplianceCalculator:
    return ComplianceCalculator(settings=settings, registry=registry)


def create_app() -> FastAPI:
    configure_logging(load_settings().log_level)
    app = FastAPI(title="Travel Rule Compliance Calculator", version=__version__)

    @app.post("/compliance/evaluate", response_model=EvaluationResponse)
    def evaluate(
        transaction: TransactionDescription,
        calculator: ComplianceCalculator = Depends(get_calculator),
    ) -> EvaluationResponse:
        with REQUEST_LATENCY.labels(endpoint="compliance_evaluate").time():
            try:
                result = calculator.calculate(transaction)
            except ConfigurationLookupError as exc:
                raise HTTPException(
                    status_code=404,
                    detail={"code": exc.code, "side": exc.side, "message": str(exc)},
                ) from exc

        return EvaluationResponse(
            **result.model_dump(),
            message=status_message(result.status),
            detail=detailed_message(result.status, result.field_analysis, transaction.direction),
        )

    @app.get("/jurisdictions")
    def list_jurisdictions(registry: JurisdictionRegistry = Depends(get_registry)) -> List[Dict[str, Any]]:
        return [
            {
                "code": config.code,
                "name": config.name,
                "currency": config.currency,
                "threshold": config.threshold,
                "threshold_display": format_threshold(config.threshold, config.currency),
            }
            for config in registry.countries()
        ]

    @app.get("/fields")
    def list_fields(fields: FieldDictionary = Depends(get_field_dictionary)) -> Dict[str, Any]:
        return fields.to_dict()

    @app.get("/healthz")
    def healthz(registry: JurisdictionRegistry = Depends(get_registry)) -> Dict[str, Any]:
        return {"status": "ok", "version": __version__, "jurisdictions": registry.codes()}

    return app


__all__ = ["create_app"]
