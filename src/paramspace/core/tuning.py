"""Optuna integration: conditional suggestions and a small optimize loop."""

from collections.abc import Callable, Mapping
from typing import Any, Literal

import optuna

from paramspace.core.grid import GridEnumerator
from paramspace.core.space import SearchSpace
from paramspace.core.transforms import Transform, apply_transform
from paramspace.models.configuration import Configuration
from paramspace.models.parameters import ParameterSpec
from paramspace.utils.logging import bound_context, get_logger

logger = get_logger(__name__)

SamplerType = Literal["tpe", "random", "grid"]
Direction = Literal["maximize", "minimize"]


def create_sampler(
    sampler_type: SamplerType,
    space: SearchSpace,
    *,
    seed: int | None = None,
    n_startup_trials: int = 10,
    resolution: int | None = None,
) -> optuna.samplers.BaseSampler:
    """Create an Optuna sampler suited to ``space``.

    Args:
        sampler_type: Type of sampler to create.
        space: Space the sampler will draw from.
        seed: Random seed for reproducibility.
        n_startup_trials: Number of random trials before TPE starts modelling.
        resolution: Grid resolution for the ``grid`` sampler.

    Returns:
        Configured Optuna sampler instance.

    Raises:
        ValueError: For an unknown type, or ``grid`` on a conditional space
            (Optuna's grid sampler has no notion of inactive parameters; iterate
            a ``GridEnumerator`` instead).
    """
    match sampler_type:
        case "tpe":
            return optuna.samplers.TPESampler(
                seed=seed,
                n_startup_trials=n_startup_trials,
                multivariate=True,
                group=True,  # models each branch's parameters separately
            )
        case "random":
            return optuna.samplers.RandomSampler(seed=seed)
        case "grid":
            if space.is_conditional():
                msg = "Grid sampler requires an unconditional space"
                raise ValueError(msg)
            grid = GridEnumerator(space, resolution)
            return optuna.samplers.GridSampler(
                {parameter_id: grid.points(parameter_id) for parameter_id in space.ids},
                seed=seed,
            )
        case _:
            msg = f"Unknown sampler type: {sampler_type}"
            raise ValueError(msg)


def _suggest_value(trial: optuna.Trial, spec: ParameterSpec) -> Any:
    """Suggest a value for a parameter based on its type."""
    match spec.type:
        case "int":
            return trial.suggest_int(spec.id, spec.lower, spec.upper)
        case "real":
            return trial.suggest_float(spec.id, spec.lower, spec.upper)
        case "categorical":
            return trial.suggest_categorical(spec.id, list(spec.levels))
        case "bool":
            return trial.suggest_categorical(spec.id, [False, True])
        case _:
            msg = f"Unknown parameter type: {spec.type}"
            raise ValueError(msg)


def suggest_configuration(trial: optuna.Trial, space: SearchSpace) -> Configuration:
    """Ask ``trial`` for a value of every parameter active under the values so far.

    Inactive parameters are never suggested, so Optuna only records the
    parameters of the chosen branch.
    """
    space.close()
    assignment: dict[str, Any] = {}
    for parameter_id in space.activation_order():
        if space.is_active(parameter_id, assignment):
            assignment[parameter_id] = _suggest_value(trial, space[parameter_id])
    return space.configuration(assignment)


def _log_trial(study: optuna.Study, trial: optuna.trial.FrozenTrial) -> None:
    logger.info(
        "Trial finished",
        trial=trial.number,
        state=trial.state.name,
        value=trial.value if len(study.directions) == 1 else trial.values,
    )


def optimize(
    space: SearchSpace,
    objective: Callable[[Mapping[str, Any]], float],
    n_trials: int,
    *,
    direction: Direction = "maximize",
    sampler: SamplerType = "tpe",
    seed: int | None = None,
    transform: Transform | None = None,
    study_name: str | None = None,
) -> optuna.Study:
    """Tune ``objective`` over ``space`` with an in-memory Optuna study.

    Each trial suggests a raw configuration, applies ``transform`` (if any) and
    evaluates ``objective`` on the result. The raw configuration and the
    transformed values are stored as the trial's ``raw`` and ``transformed``
    user attributes.

    Args:
        space: Search space to tune over.
        objective: Evaluator called with consumer-facing values.
        n_trials: Number of trials to run.
        direction: Optimization direction.
        sampler: Optuna sampler type, see ``create_sampler``.
        seed: Sampler seed.
        transform: Optional transform applied before evaluation.
        study_name: Optional study name.

    Returns:
        The finished study.
    """
    study = optuna.create_study(
        study_name=study_name,
        direction=direction,
        sampler=create_sampler(sampler, space, seed=seed),
    )

    def _objective(trial: optuna.Trial) -> float:
        raw = suggest_configuration(trial, space)
        values = raw.to_dict() if transform is None else apply_transform(transform, raw, space)
        trial.set_user_attr("raw", raw.to_dict())
        trial.set_user_attr("transformed", values)
        return objective(values)

    with bound_context(study=study.study_name):
        logger.info("Starting study", n_trials=n_trials, sampler=sampler, direction=direction)
        study.optimize(_objective, n_trials=n_trials, callbacks=[_log_trial])
        completed = [t for t in study.trials if t.state == optuna.trial.TrialState.COMPLETE]
        logger.info(
            "Study finished",
            n_trials=len(study.trials),
            best_value=study.best_value if completed else None,
        )
    return study
