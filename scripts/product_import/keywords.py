"""
Tablas estáticas de palabras clave para clasificar productos.

Cada tabla se evalúa en orden: la primera coincidencia gana, por eso las
claves más específicas van antes que las más cortas.
"""

from __future__ import annotations

from typing import Dict, Tuple

SIZE_CODES: Tuple[str, ...] = ("TGM", "GM", "MM", "PM")

SIZE_DIMENSIONS: Dict[str, str] = {
    "TGM": "Très Grand Modèle (50cm)",
    "GM": "Grand Modèle (40cm)",
    "MM": "Modèle Moyen (30cm)",
    "PM": "Petit Modèle (20cm)",
}

# Estimaciones por talla (se ajustan manualmente después)
ESTIMATED_WEIGHT_GRAMS: Dict[str, int] = {"PM": 200, "MM": 400, "GM": 600, "TGM": 1000}
ESTIMATED_QUANTITY: Dict[str, int] = {"PM": 12, "MM": 24, "GM": 36, "TGM": 48}

DEFAULT_MAIN_CATEGORY = "Accessoires"
DEFAULT_SUB_CATEGORY = "Divers"

# (prefijo del nombre, categoría principal)
CATEGORY_MAPPINGS: Tuple[Tuple[str, str], ...] = (
    ("petit plateau", "Plateaux"),
    ("petit pot", "Pots"),
    ("plateau", "Plateaux"),
    ("coupe", "Coupes"),
    ("bol", "Bols"),
    ("pot", "Pots"),
    ("boîte", "Boîtes"),
    ("coffret", "Coffrets"),
    ("corbeille", "Corbeilles"),
    ("encensoir", "Encensoirs"),
    ("écrin", "Écrins"),
    ("bateau", "Plateaux"),
)

MATERIAL_KEYWORDS: Tuple[str, ...] = (
    "en similicuir",
    "en inox",
    "en céramique",
    "en verre",
    "en bambou",
    "en bamboo",
    "en tissu",
    "en bois",
    "en terre cuite",
    "en porcelaine",
    "en métal",
    "en cristal",
    "nacre",
    "sur pied",
    "sur pieds",
    "sur socle",
    "ajouré",
    "ajourée",
    "perforé",
    "texturé",
    "texturée",
)

# Materiales sin el prefijo "en" que se buscan si MATERIAL_KEYWORDS no coincide
MATERIAL_FALLBACKS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("nacre",), "Nacre"),
    (("similicuir", "simili cuir"), "Similicuir"),
    (("tissu",), "Tissu"),
    (("inox",), "Inox"),
    (("céramique", "ceramique"), "Céramique"),
    (("verre",), "Verre"),
    (("bambou", "bamboo"), "Bambou"),
    (("bois",), "Bois"),
    (("porcelaine",), "Porcelaine"),
    (("métal", "metal"), "Métal"),
    (("cristal",), "Cristal"),
    (("terre cuite",), "Terre cuite"),
    (("osier",), "Osier"),
)

BRAND_KEYWORDS: Tuple[str, ...] = (
    "Alice",
    "Argentica",
    "Ceramica",
    "Céramica",
    "Flora",
    "Isabella",
    "Murano",
    "Azzuro",
    "Lalique",
    "Inoxia",
    "Jeff",
    "Cashemir",
    "VIP",
    "Couture",
    "Anabella",
    "Olga",
    "Medicis",
    "Mathilda",
    "Warda",
    "Miranda",
    "Metallica",
    "Bohemia",
    "Rosa",
    "Marshica",
    "Tiara",
    "Terracotta",
    "Corallia",
    "Bella",
    "Mbikhra",
    "Indigha",
    "Piassetti",
    "Lola",
    "Narjis",
    "Natura",
    "Ambre",
    "Amber",
    "Angelina",
    "Exotica",
    "Cristina",
)

COLLECTION_BRAND = "Collection Jeff"

# Palabras capitalizadas al final del nombre que no son marcas
COMMON_COLOR_WORDS: Tuple[str, ...] = (
    "noir",
    "blanc",
    "bleu",
    "vert",
    "rouge",
    "doré",
    "argenté",
)

SHAPE_KEYWORDS: Tuple[str, ...] = (
    "rectangulaire",
    "carré",
    "cubique",
    "rond",
    "ovale",
    "hexagonal",
    "bateau",
)

GIFT_BOX_KEYWORDS: Tuple[str, ...] = ("cadeau", "coffret", "boîte cadeau", "boite cadeau")

PREMIUM_KEYWORDS: Tuple[str, ...] = ("premium", "royal", "prestige", "vip", "luxe", "luxury")

# (palabras buscadas, tipo de chocolate)
CHOCOLATE_TYPE_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("assortiment varié", "assortiment varie"), "assortiment"),
    (("chocolat noir", "noir"), "noir"),
    (("chocolat au lait", "lait"), "lait"),
    (("chocolat blanc", "blanc"), "blanc"),
    (("mixte",), "mixte"),
    (("cadeau", "coffret", "boîte"), "assortiment"),
)

DEFAULT_CHOCOLATE_TYPE = "assortiment"

# (palabras buscadas, tags añadidos)
TAG_RULES: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (("assortiment varié", "assortiment varie"), ("assortiment varié",)),
    (("premium", "royal", "prestige"), ("premium",)),
    (("vip",), ("VIP", "premium")),
    (("cadeau", "coffret"), ("cadeau",)),
    (("collection jeff",), ("Collection Jeff",)),
    (("décoratif", "decoratif"), ("décoratif",)),
    (("luxe", "luxury"), ("luxe",)),
)
