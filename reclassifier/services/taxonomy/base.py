"""Built-in catalog taxonomy.

Categories and subcategories are listed in declaration order, which is the
final tie-breaker when two candidates score the same. Labels are given only
where the slug alone would produce misleading label tokens.
"""
from typing import Dict, List, Tuple

from reclassifier.models.taxonomy import (
    CategoryDefinition,
    SubcategoryDefinition,
    Taxonomy,
    DEFAULT_GENDERS,
)


GENDER_NEUTRAL_CATEGORIES = frozenset({"hogar_y_lifestyle", "gafas_y_optica"})

CHILD_UNLIKELY_CATEGORIES = frozenset({
    "hogar_y_lifestyle",
    "gafas_y_optica",
    "joyeria_y_bisuteria",
    "bolsos_y_marroquineria",
})


BASE_CATEGORIES: List[Tuple[str, str, List[str]]] = [
    ("camisetas_y_tops", "Camisetas y tops", [
        "body_bodysuit",
        "polo",
        "henley_camiseta_con_botones",
        "top_basico_strap_top_tiras",
        "tank_top",
        "camisilla_esqueleto_sin_mangas",
        "crop_top",
        "camiseta_cuello_alto_tortuga",
        "camiseta_manga_larga",
        "camiseta_manga_corta",
    ]),
    ("camisas_y_blusas", "Camisas y blusas", [
        "guayabera",
        "camisa_denim",
        "camisa_de_lino",
        "camisa_estampada",
        "camisa_formal",
        "blusa_off_shoulder_hombros_descubiertos",
        "blusa_tipo_tunica",
        "blusa_cuello_alto",
        "blusa_manga_larga",
        "blusa_manga_corta",
        "camisa_casual",
    ]),
    ("buzos_hoodies_y_sueteres", "Buzos, hoodies y suéteres", [
        "hoodie_con_cremallera",
        "hoodie_canguro",
        "buzo_cuello_alto_half_zip",
        "cardigan",
        "chaleco_tejido",
        "sueter_tejido",
        "buzo_polar",
        "ruana_poncho",
        "saco_cuello_v",
        "buzo_cuello_redondo",
    ]),
    ("chaquetas_y_abrigos", "Chaquetas y abrigos", [
        "chaqueta_denim",
        "chaqueta_tipo_cuero_cuero_o_sintetico",
        "bomber",
        "parka",
        "rompevientos",
        "impermeable",
        "puffer_acolchada",
        "trench_gabardina",
        "abrigo_largo",
        "chaleco_acolchado",
    ]),
    ("blazers_y_sastreria", "Blazers y sastrería", [
        "smoking_tuxedo_jacket",
        "chaleco_de_vestir",
        "traje_sastre_conjunto_blazer_pantalon_falda",
        "pantalon_sastre",
        "falda_sastre",
        "blazer_oversize",
        "blazer_entallado",
        "blazer_clasico",
    ]),
    ("vestidos", "Vestidos", [
        "vestido_infantil",
        "vestido_camisero",
        "vestido_sueter",
        "vestido_coctel",
        "vestido_formal_noche",
        "vestido_de_fiesta",
        "vestido_de_verano",
        "vestido_midi",
        "vestido_maxi",
        "vestido_mini",
        "vestido_casual",
    ]),
    ("enterizos_y_overoles", "Enterizos y overoles", [
        "pelele_enterizo_bebe",
        "romper_jumpsuit_corto",
        "jumpsuit_largo",
        "overol_denim",
        "jardinera_overall_tipo_tiras",
        "enterizo_deportivo",
        "enterizo_de_fiesta",
    ]),
    ("conjuntos_y_sets_2_piezas", "Conjuntos y sets (2 piezas)", [
        "conjunto_pijama",
        "conjunto_deportivo_2_piezas",
        "set_bebe_2_3_piezas",
        "set_formal_chaleco_pantalon_sastre",
        "conjunto_matching_set_casual",
    ]),
    ("pantalones_no_denim", "Pantalones (no denim)", [
        "pantalon_chino",
        "pantalon_cargo",
        "jogger_casual",
        "palazzo",
        "culotte",
        "leggings_casual",
        "pantalon_de_lino",
        "pantalon_de_dril",
        "pantalon_skinny_no_denim",
        "pantalon_flare_no_denim",
    ]),
    ("jeans_y_denim", "Jeans y denim", [
        "jean_skinny",
        "jean_slim",
        "jean_straight",
        "jean_wide_leg",
        "jean_mom",
        "jean_boyfriend",
        "jean_bootcut",
        "jean_flare",
        "jean_distressed_rotos",
        "jean_infantil",
        "jean_regular",
    ]),
    ("shorts_y_bermudas", "Shorts y bermudas", [
        "bermuda",
        "biker_short",
        "short_deportivo",
        "short_denim",
        "short_de_lino",
        "short_cargo",
        "short_de_vestir",
        "short_infantil",
        "short_casual_algodon",
    ]),
    ("faldas", "Faldas", [
        "falda_short_skort",
        "falda_denim",
        "falda_plisada",
        "falda_lapiz",
        "falda_cruzada_wrap",
        "falda_skater",
        "falda_tutu_nina",
        "mini_falda",
        "falda_midi",
        "falda_maxi",
    ]),
    ("ropa_deportiva_y_performance", "Ropa deportiva y performance", [
        "ropa_de_compresion",
        "ropa_de_running",
        "ropa_de_ciclismo",
        "ropa_de_futbol_entrenamiento",
        "top_deportivo_bra_deportivo",
        "leggings_deportivos",
        "shorts_deportivos",
        "sudadera_pants_deportivos",
        "chaqueta_deportiva",
        "conjunto_deportivo",
        "camiseta_deportiva",
    ]),
    ("ropa_interior_basica", "Ropa interior básica", [
        "brasier",
        "bralette",
        "panty_trusa",
        "tanga",
        "brasilera",
        "boxer",
        "brief",
    ]),
    ("lenceria_y_fajas_shapewear", "Lencería y fajas (shapewear)", [
        "faja_cintura",
        "corse",
        "liguero",
    ]),
    ("pijamas_y_ropa_de_descanso_loungewear", "Pijamas y ropa de descanso", [
        "pijama_bebe",
        "pijama_infantil",
        "pijama_enteriza_onesie",
        "bata_robe",
        "camison",
        "pijama_termica",
        "short_pijama",
        "pantalon_pijama",
        "set_loungewear_jogger_buzo",
        "pijama_2_piezas",
    ]),
    ("trajes_de_bano_y_playa", "Trajes de baño y playa", [
        "pareo",
        "tankini",
        "trikini",
        "bikini",
        "vestido_de_bano_entero",
        "bermuda_boxer_de_bano",
        "short_de_bano",
        "rashguard_licra_uv",
        "salida_de_bano_kaftan",
        "traje_de_bano_infantil",
        "panal_de_agua_bebe",
    ]),
    ("accesorios_textiles_y_medias", "Accesorios textiles y medias", [
        "pantimedias_medias_veladas",
        "medias_calcetines",
        "cinturones",
        "corbatas",
        "pajaritas_monos",
        "bufandas",
        "panuelos_bandanas",
        "gorras",
        "sombreros",
        "gorros_beanies",
    ]),
    ("calzado", "Calzado", [
        "botas",
        "botines",
        "tenis_sneakers",
        "zapatos_deportivos",
        "zapatos_formales",
        "sandalias",
        "tacones",
        "mocasines_loafers",
        "balerinas_flats",
        "alpargatas_espadrilles",
        "zuecos",
        "chanclas_flip_flops",
    ]),
    ("bolsos_y_marroquineria", "Bolsos y marroquinería", [
        "maletas_y_equipaje",
        "estuches_cartucheras_neceseres",
        "portadocumentos_porta_pasaporte",
        "billetera",
        "cartera_bolso_de_mano",
        "mochila",
        "morral",
        "rinonera_canguro",
        "clutch_sobre",
        "bolso_tote",
        "bolso_bandolera_crossbody",
        "bolso_de_viaje_duffel",
    ]),
    ("joyeria_y_bisuteria", "Joyería y bisutería", [
        "relojes",
        "piercings",
        "aretes_pendientes",
        "collares",
        "pulseras_brazaletes",
        "anillos",
        "tobilleras",
        "dijes_charms",
        "broches_prendedores",
        "sets_de_joyeria",
    ]),
    ("gafas_y_optica", "Gafas y óptica", [
        "gafas_opticas_formuladas",
        "monturas",
        "lentes_de_proteccion",
        "gafas_de_sol",
    ]),
    ("hogar_y_lifestyle", "Hogar y lifestyle", [
        "velas_y_aromas",
        "cocina_y_vajilla",
        "textiles_de_mesa",
        "cojines_y_fundas",
        "toallas_y_bano",
        "mantas_y_cobijas",
        "arte_y_posters",
        "papeleria_y_libros",
        "termos_y_botellas",
        "hogar_otros",
    ]),
    ("tarjeta_regalo", "Tarjeta regalo", [
        "tarjeta_de_regalo",
    ]),
]


# Labels for slugs whose words would otherwise act as misleading evidence
SUBCATEGORY_LABELS: Dict[str, str] = {
    "falda_short_skort": "Skort",
    "falda_tutu_nina": "Falda tutú",
    "clutch_sobre": "Clutch",
    "chaqueta_tipo_cuero_cuero_o_sintetico": "Chaqueta de cuero",
    "smoking_tuxedo_jacket": "Smoking / tuxedo",
    "traje_sastre_conjunto_blazer_pantalon_falda": "Traje sastre",
    "set_formal_chaleco_pantalon_sastre": "Set formal sastre",
    "set_loungewear_jogger_buzo": "Set loungewear",
    "faja_cintura": "Faja",
    "panal_de_agua_bebe": "Pañal de agua",
    "vestido_de_bano_entero": "Traje de baño entero",
    "bermuda_boxer_de_bano": "Bermuda de baño",
    "portadocumentos_porta_pasaporte": "Portadocumentos",
    "cartera_bolso_de_mano": "Cartera / bolso de mano",
    "hogar_otros": "Hogar",
}


def build_base_taxonomy() -> Taxonomy:
    """Build the built-in taxonomy model.

    Returns:
        Taxonomy with every base category, subcategory and gender
    """
    categories = [
        CategoryDefinition(
            key=key,
            label=label,
            subcategories=[
                SubcategoryDefinition(key=sub, label=SUBCATEGORY_LABELS.get(sub))
                for sub in subcategories
            ],
        )
        for key, label, subcategories in BASE_CATEGORIES
    ]
    return Taxonomy(categories=categories, genders=list(DEFAULT_GENDERS))
