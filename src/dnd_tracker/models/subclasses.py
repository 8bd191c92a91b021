"""Subclass catalog.

Four subclasses per class, each with the label stored on the character
record and the alternative spellings (French and English) accepted on input.
"""

from __future__ import annotations

from dnd_tracker.models.enums import DndClass, canonical_class, normalize_label


# class -> {canonical label: aliases}
SUBCLASSES: dict[DndClass, dict[str, tuple[str, ...]]] = {
    DndClass.BARBARIAN: {
        "Voie de l'Arbre-Monde": ("Voie de l arbre monde", "Path of the World Tree"),
        "Voie du Berserker": ("Berserker", "Path of the Berserker"),
        "Voie du Cœur sauvage": ("Voie du Coeur sauvage", "Path of the Wild Heart"),
        "Voie du Zélateur": ("Path of the Zealot",),
    },
    DndClass.BARD: {
        "Collège de la Danse": ("College of Dance",),
        "Collège du Savoir": ("College of Lore", "Lore"),
        "Collège de la Séduction": ("College of Glamour", "Glamour"),
        "Collège de la Vaillance": ("College of Valor", "Valor"),
    },
    DndClass.CLERIC: {
        "Domaine de la Guerre": ("War Domain",),
        "Domaine de la Lumière": ("Light Domain",),
        "Domaine de la Ruse": ("Trickery Domain",),
        "Domaine de la Vie": ("Life Domain",),
    },
    DndClass.DRUID: {
        "Cercle des Astres": ("Circle of Stars", "Stars"),
        "Cercle de la Lune": ("Circle of the Moon", "Moon"),
        "Cercle des Mers": ("Circle of the Sea", "Sea"),
        "Cercle de la Terre": ("Circle of the Land", "Land"),
    },
    DndClass.SORCERER: {
        "Sorcellerie aberrante": ("Aberrant Sorcery", "Aberrant Mind"),
        "Sorcellerie draconique": ("Draconic Sorcery",),
        "Sorcellerie mécanique": ("Clockwork Sorcery",),
        "Sorcellerie sauvage": ("Wild Magic Sorcery",),
    },
    DndClass.FIGHTER: {
        "Champion": ("Champion Fighter",),
        "Chevalier occultiste": ("Eldritch Knight",),
        "Maître de guerre": ("Battle Master", "Battlemaster"),
        "Soldat psi": ("Psi Warrior", "Psychic Warrior"),
    },
    DndClass.WIZARD: {
        "Abjurateur": ("Abjuration", "School of Abjuration"),
        "Devin": ("Divination", "School of Divination"),
        "Évocateur": ("School of Evocation", "Evocation"),
        "Illusionniste": ("Illusion", "School of Illusion"),
    },
    DndClass.MONK: {
        "Crédo des Éléments": ("Way of the Four Elements",),
        "Crédo de la Miséricorde": ("Way of Mercy",),
        "Crédo de l'Ombre": ("Way of Shadow", "Shadow"),
        "Crédo de la Paume": ("Way of the Open Hand",),
    },
    DndClass.PALADIN: {
        "Serment de Gloire": ("Oath of Glory",),
        "Serment des Anciens": ("Oath of the Ancients",),
        "Serment de Dévotion": ("Oath of Devotion",),
        "Serment de Vengeance": ("Oath of Vengeance",),
    },
    DndClass.RANGER: {
        "Belluaire": ("Beast Master", "Beastmaster"),
        "Chasseur": ("Hunter",),
        "Traqueur des ténèbres": ("Gloom Stalker",),
        "Vagabond féérique": ("Fey Wanderer",),
    },
    DndClass.ROGUE: {
        "Âme acérée": ("Soulknife",),
        "Arnaqueur arcanique": ("Arcane Trickster",),
        "Assassin": (),
        "Voleur": ("Thief",),
    },
    DndClass.WARLOCK: {
        "Protecteur Archifée": ("Archfey", "The Archfey"),
        "Protecteur Céleste": ("The Celestial", "Celestial"),
        "Protecteur Fiélon": ("The Fiend", "Fiend"),
        "Protecteur Grand Ancien": ("The Great Old One", "Great Old One"),
    },
}


def get_subclass_options(dnd_class: DndClass | str | None) -> list[str]:
    """List the subclass labels available to a class (empty if unknown)."""
    resolved = canonical_class(dnd_class)
    if resolved is None:
        return []
    return list(SUBCLASSES[resolved])


def canonical_subclass(dnd_class: DndClass | str | None, name: str) -> str | None:
    """Resolve a subclass spelling to its catalog label.

    Returns:
        The canonical label, or None when the name matches no subclass of
        the class.
    """
    resolved = canonical_class(dnd_class)
    if resolved is None:
        return None
    wanted = normalize_label(name)
    for label, aliases in SUBCLASSES[resolved].items():
        if wanted in {normalize_label(label), *(normalize_label(a) for a in aliases)}:
            return label
    return None


__all__ = [
    "SUBCLASSES",
    "get_subclass_options",
    "canonical_subclass",
]
