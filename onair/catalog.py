"""
Catalog model for the broadcast simulator.

The catalog is the immutable set of segments the scheduler draws from:
songs, combos (song-specific announcements), transitions and intros,
plus the two index tables linking each combo to its song.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from onair.config import StationConfig, load_config
from onair.errors import ConfigError, DegenerateCatalogError

logger = logging.getLogger(__name__)

MIN_CATEGORY_SIZE = 2


@dataclass(frozen=True)
class Catalog:
    """
    Validated, immutable segment catalog.

    Combos are numbered in the order their songs appear, so
    combo_to_song is strictly increasing.

    Attributes:
        songs: Song filenames
        combos: Combo filenames
        transitions: Transition filenames
        intros: Intro filenames
        combo_to_song: combo index -> song index (one entry per combo)
        song_to_combo: song index -> combo index, or None for songs without a combo
        min_b1_songs: Shortest song run in a chatty block
        max_b1_songs: Longest song run in a chatty block
        audio_dir: Directory override from the station document, if any
    """
    songs: Tuple[str, ...]
    combos: Tuple[str, ...]
    transitions: Tuple[str, ...]
    intros: Tuple[str, ...]
    combo_to_song: Tuple[int, ...]
    song_to_combo: Tuple[Optional[int], ...]
    min_b1_songs: int
    max_b1_songs: int
    audio_dir: Optional[str] = None

    def __post_init__(self) -> None:
        self._validate()

    @property
    def num_songs(self) -> int:
        return len(self.songs)

    @property
    def num_combos(self) -> int:
        return len(self.combos)

    @property
    def num_trans(self) -> int:
        return len(self.transitions)

    @property
    def num_intros(self) -> int:
        return len(self.intros)

    def _validate(self) -> None:
        for category, size in (
            ("songs", self.num_songs),
            ("combos", self.num_combos),
            ("transitions", self.num_trans),
            ("intros", self.num_intros),
        ):
            if size < MIN_CATEGORY_SIZE:
                raise DegenerateCatalogError(category, size)

        if self.min_b1_songs < 0 or self.max_b1_songs < 0:
            raise ConfigError(
                f"Song run bounds must be non-negative, got "
                f"min_b1_songs={self.min_b1_songs}, max_b1_songs={self.max_b1_songs}"
            )
        if self.min_b1_songs > self.max_b1_songs:
            raise ConfigError(
                f"min_b1_songs ({self.min_b1_songs}) exceeds max_b1_songs ({self.max_b1_songs})"
            )

        if len(self.combo_to_song) != self.num_combos:
            raise ConfigError("combo_to_song must have one entry per combo")
        if len(self.song_to_combo) != self.num_songs:
            raise ConfigError("song_to_combo must have one entry per song")
        for combo_idx, song_idx in enumerate(self.combo_to_song):
            if not 0 <= song_idx < self.num_songs:
                raise ConfigError(f"Combo {combo_idx} links to unknown song index {song_idx}")
            if self.song_to_combo[song_idx] != combo_idx:
                raise ConfigError(f"Combo {combo_idx} and song {song_idx} are not mutually linked")
        linked = sum(1 for c in self.song_to_combo if c is not None)
        if linked != self.num_combos:
            raise ConfigError("song_to_combo links more songs than there are combos")

    @classmethod
    def from_config(cls, config: StationConfig) -> "Catalog":
        """
        Build the catalog from a parsed station document.

        Raises:
            DegenerateCatalogError: If any category has fewer than 2 entries
            ConfigError: If the song run bounds are invalid
        """
        songs: List[str] = []
        combos: List[str] = []
        combo_to_song: List[int] = []
        song_to_combo: List[Optional[int]] = []

        for song_idx, (song, combo) in enumerate(config.songs_combo):
            songs.append(song)
            if combo is None:
                song_to_combo.append(None)
            else:
                song_to_combo.append(len(combos))
                combo_to_song.append(song_idx)
                combos.append(combo)

        catalog = cls(
            songs=tuple(songs),
            combos=tuple(combos),
            transitions=tuple(config.trans),
            intros=tuple(config.intros),
            combo_to_song=tuple(combo_to_song),
            song_to_combo=tuple(song_to_combo),
            min_b1_songs=config.min_b1_songs,
            max_b1_songs=config.max_b1_songs,
            audio_dir=config.audio_dir,
        )
        logger.info(
            f"[CATALOG] {catalog.num_songs} songs ({catalog.num_combos} with combos), "
            f"{catalog.num_trans} transitions, {catalog.num_intros} intros, "
            f"song run {catalog.min_b1_songs}-{catalog.max_b1_songs}"
        )
        return catalog

    @classmethod
    def from_file(cls, path: str) -> "Catalog":
        """Load, parse and validate a station document in one step."""
        return cls.from_config(load_config(path))
