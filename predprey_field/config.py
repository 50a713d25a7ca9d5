"""Configuration dataclasses and YAML loader for the predator-prey simulation."""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from pathlib import Path
import yaml


DEFAULT_DEPTH = 50
DEFAULT_WIDTH = 50


@dataclass
class GridConfig:
    depth: int = 80
    width: int = 120


@dataclass
class PopulationConfig:
    # Checked per cell in this order; the first hit wins
    trap_probability: float = 0.008
    fox_probability: float = 0.02
    rabbit_probability: float = 0.08
    pond_count: int = 0
    pond_max_field_percent: int = 20


@dataclass
class TrapConfig:
    armed: bool = False  # Trigger traps as soon as they are placed


@dataclass
class SpeciesConfig:
    breeding_age: int
    max_age: int
    breeding_probability: float
    max_litter_size: int
    food_value: int = 0               # Steps of food a fox gains per rabbit
    disease_death_probability: float = 0.1
    requires_mate: bool = False


def fox_defaults() -> SpeciesConfig:
    return SpeciesConfig(breeding_age=10, max_age=150,
                         breeding_probability=0.35, max_litter_size=5,
                         food_value=7)


def rabbit_defaults() -> SpeciesConfig:
    return SpeciesConfig(breeding_age=5, max_age=40,
                         breeding_probability=0.15, max_litter_size=4)


@dataclass
class SimulationConfig:
    grid: GridConfig = field(default_factory=GridConfig)
    population: PopulationConfig = field(default_factory=PopulationConfig)
    traps: TrapConfig = field(default_factory=TrapConfig)
    fox: SpeciesConfig = field(default_factory=fox_defaults)
    rabbit: SpeciesConfig = field(default_factory=rabbit_defaults)
    max_steps: int = 500

    # Export flags (can be overridden by CLI)
    log_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))
    log_name: str = "Logs.dat"

    @property
    def log_path(self) -> Path:
        return self.out_dir / self.log_name


def default_config() -> SimulationConfig:
    """Built-in configuration used when no file is given."""
    return SimulationConfig()


def _check_probability(name: str, value: float) -> float:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1, got {value}")
    return value


def _check_non_negative(name: str, value: int) -> int:
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def _parse_population(pop_raw: Dict[str, Any]) -> PopulationConfig:
    """Parse initial population settings from raw YAML data."""
    defaults = PopulationConfig()
    return PopulationConfig(
        trap_probability=_check_probability(
            'trap_probability',
            pop_raw.get('trap_probability', defaults.trap_probability)),
        fox_probability=_check_probability(
            'fox_probability',
            pop_raw.get('fox_probability', defaults.fox_probability)),
        rabbit_probability=_check_probability(
            'rabbit_probability',
            pop_raw.get('rabbit_probability', defaults.rabbit_probability)),
        pond_count=_check_non_negative(
            'pond_count', pop_raw.get('pond_count', defaults.pond_count)),
        pond_max_field_percent=_check_non_negative(
            'pond_max_field_percent',
            pop_raw.get('pond_max_field_percent',
                        defaults.pond_max_field_percent))
    )


def _parse_species(name: str, raw: Dict[str, Any],
                   defaults: SpeciesConfig) -> SpeciesConfig:
    """Parse one species' rules, falling back to its defaults."""
    species = SpeciesConfig(
        breeding_age=_check_non_negative(
            f'{name}.breeding_age',
            raw.get('breeding_age', defaults.breeding_age)),
        max_age=raw.get('max_age', defaults.max_age),
        breeding_probability=_check_probability(
            f'{name}.breeding_probability',
            raw.get('breeding_probability', defaults.breeding_probability)),
        max_litter_size=_check_non_negative(
            f'{name}.max_litter_size',
            raw.get('max_litter_size', defaults.max_litter_size)),
        food_value=raw.get('food_value', defaults.food_value),
        disease_death_probability=_check_probability(
            f'{name}.disease_death_probability',
            raw.get('disease_death_probability',
                    defaults.disease_death_probability)),
        requires_mate=bool(raw.get('requires_mate', defaults.requires_mate))
    )
    if species.max_age < 1:
        raise ValueError(f"{name}.max_age must be at least 1")
    if species.max_litter_size < 1:
        raise ValueError(f"{name}.max_litter_size must be at least 1")
    return species


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    # Dimensions are not validated here: the simulator falls back to
    # DEFAULT_DEPTH x DEFAULT_WIDTH when either is not positive
    grid_raw = raw.get('grid', {})
    grid_defaults = GridConfig()
    grid = GridConfig(
        depth=grid_raw.get('depth', grid_defaults.depth),
        width=grid_raw.get('width', grid_defaults.width)
    )

    population = _parse_population(raw.get('population', {}))
    traps = TrapConfig(armed=bool(raw.get('traps', {}).get('armed', False)))

    species_raw = raw.get('species', {})
    fox = _parse_species('fox', species_raw.get('fox', {}), fox_defaults())
    if fox.food_value < 1:
        raise ValueError("fox.food_value must be at least 1")
    rabbit = _parse_species('rabbit', species_raw.get('rabbit', {}),
                            rabbit_defaults())

    # Parse simulation config
    sim_raw = raw.get('simulation', {})

    # Parse export config (optional)
    export_raw = raw.get('export', {})

    return SimulationConfig(
        grid=grid,
        population=population,
        traps=traps,
        fox=fox,
        rabbit=rabbit,
        max_steps=_check_non_negative(
            'max_steps', sim_raw.get('max_steps', 500)),
        seed=sim_raw.get('seed'),
        log_enabled=export_raw.get('log', True),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False),
        log_name=export_raw.get('log_name', 'Logs.dat')
    )
