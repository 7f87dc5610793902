"""Curated keyword tables used to build the evidence index.

These tables are plain data. ``TaxonomyIndex.build`` combines them with the
taxonomy's own labels and synonyms; nothing here is read at match time.
"""
from typing import Dict, List


# Connectors and modifiers that never count as evidence on their own
LABEL_STOPWORDS = frozenset({
    "de", "del", "la", "el", "los", "las", "y", "o", "con", "sin", "para", "en",
    "a", "al", "por", "tipo", "the", "and", "of", "with", "for",
    "manga", "mangas", "larga", "largo", "corta", "corto", "cuello", "alto",
    "casual", "basico", "basica", "piezas", "pieza", "otros", "otras", "ropa",
    "off", "porta", "mano", "tejido", "agua", "entero", "entera", "regalo",
    "algodon", "no",
})


# Category head nouns (category-level evidence, not tied to one subcategory)
CATEGORY_HEAD_KEYWORDS: Dict[str, List[str]] = {
    "camisetas_y_tops": [
        "camiseta", "camisetas", "tshirt", "t shirt", "top", "tops", "croptop",
        "crop top", "camisilla", "esqueleto", "tank",
    ],
    "camisas_y_blusas": [
        "camisa", "camisas", "blusa", "blusas", "shirt", "blouse", "guayabera",
    ],
    "buzos_hoodies_y_sueteres": [
        "buzo", "buzos", "hoodie", "hoodies", "sweatshirt", "sueter", "sweater",
        "cardigan", "knit",
    ],
    "chaquetas_y_abrigos": [
        "chaqueta", "chaquetas", "abrigo", "coat", "jacket", "parka", "trench",
        "rompevientos", "impermeable",
    ],
    "blazers_y_sastreria": [
        "blazer", "blazers", "sastreria", "saco formal", "tuxedo", "smoking",
    ],
    "vestidos": ["vestido", "vestidos", "dress", "dresses", "maxi vestido"],
    "enterizos_y_overoles": [
        "enterizo", "enterizos", "jumpsuit", "overol", "overall", "romper", "jardinera",
    ],
    "conjuntos_y_sets_2_piezas": [
        "conjunto", "conjuntos", "set", "matching set", "dos piezas", "2 piezas",
    ],
    "pantalones_no_denim": [
        "pantalon", "pantalones", "trouser", "trousers", "pants", "jogger",
        "palazzo", "culotte", "cargo",
    ],
    "jeans_y_denim": ["jean", "jeans", "denim"],
    "shorts_y_bermudas": ["short", "shorts", "bermuda", "bermudas"],
    "faldas": ["falda", "faldas", "skirt", "skirts"],
    "ropa_deportiva_y_performance": [
        "ropa deportiva", "deportivo", "deportiva", "activewear", "sportswear",
        "gym", "training", "performance",
    ],
    "ropa_interior_basica": [
        "ropa interior", "underwear", "brasier", "bra", "panty", "cachetero",
        "tanga", "boxer", "brief", "briefs",
    ],
    "lenceria_y_fajas_shapewear": [
        "lenceria", "lingerie", "faja", "fajas", "shapewear", "corset", "corse",
        "liguero", "babydoll", "baby doll",
    ],
    "pijamas_y_ropa_de_descanso_loungewear": [
        "pijama", "pijamas", "pyjama", "pajama", "sleepwear", "loungewear",
        "bata", "camison",
    ],
    "trajes_de_bano_y_playa": [
        "bikini", "trikini", "tankini", "traje de bano", "vestido de bano",
        "banador", "pareo", "rashguard", "swimwear", "swimsuit",
    ],
    "accesorios_textiles_y_medias": [
        "medias", "calcetin", "calcetines", "bufanda", "panuelo", "gorra",
        "sombrero", "bandana", "cinturon", "diadema", "balaca",
    ],
    "calzado": [
        "zapato", "zapatos", "tenis", "sneaker", "sneakers", "sandalia",
        "sandalias", "tacon", "tacones", "bota", "botas", "botin", "botines",
        "loafer", "mocasin", "mocasines", "alpargata", "calzado",
    ],
    "bolsos_y_marroquineria": [
        "bolso", "bolsos", "cartera", "carteras", "mochila", "morral",
        "rinonera", "crossbody", "bandolera", "clutch", "billetera", "estuche",
        "neceser", "cosmetiquera", "maleta", "equipaje", "duffel", "llavero",
    ],
    "joyeria_y_bisuteria": [
        "joya", "joyas", "joyeria", "bisuteria", "jewelry", "arete", "aretes",
        "argolla", "argollas", "anillo", "anillos", "ring", "collar",
        "collares", "pulsera", "pulseras", "piercing",
    ],
    "gafas_y_optica": [
        "gafas", "lentes", "lente", "montura", "optica", "sunglasses", "goggles",
    ],
    "hogar_y_lifestyle": [
        "hogar", "decoracion", "vela", "difusor", "ambientador", "poster",
        "agenda", "cuaderno", "vajilla", "botella", "termo",
    ],
    "tarjeta_regalo": [
        "tarjeta regalo", "tarjeta de regalo", "gift card", "giftcard", "bono de regalo",
    ],
}


# Extra keywords per subcategory (Spanish and English catalog vocabulary)
SUBCATEGORY_SYNONYMS: Dict[str, List[str]] = {
    # camisetas_y_tops
    "body_bodysuit": ["body", "bodysuit", "bodi", "bodie"],
    "polo": ["pique", "camiseta polo"],
    "henley_camiseta_con_botones": ["henley"],
    "top_basico_strap_top_tiras": ["strap", "spaghetti", "top tiras", "top de tiras", "strap top", "top"],
    "tank_top": ["tank top", "tanktop"],
    "camisilla_esqueleto_sin_mangas": ["camisilla", "esqueleto", "sin mangas", "sisa", "sleeveless"],
    "crop_top": ["crop", "crop top"],
    "camiseta_cuello_alto_tortuga": ["tortuga", "turtleneck", "cuello alto"],
    "camiseta_manga_larga": ["manga larga", "long sleeve"],
    "camiseta_manga_corta": ["manga corta", "short sleeve", "camiseta", "camisetas", "t shirt", "tshirt", "tee"],
    # camisas_y_blusas
    "camisa_denim": ["denim", "jean", "camisa jean"],
    "camisa_de_lino": ["lino", "linen"],
    "camisa_estampada": ["estampada", "print", "printed"],
    "camisa_formal": ["formal", "office", "vestir", "antiarrugas", "wrinkle free", "non iron"],
    "blusa_off_shoulder_hombros_descubiertos": ["off shoulder", "hombros descubiertos", "escote bandeja"],
    "blusa_tipo_tunica": ["tunica", "tunika", "bluson", "blusones"],
    "blusa_cuello_alto": ["cuello alto", "turtleneck"],
    "blusa_manga_larga": ["manga larga", "long sleeve", "blouse", "blouses", "blusa", "blusas"],
    "blusa_manga_corta": ["manga corta", "short sleeve"],
    "camisa_casual": ["camisa", "camisas", "shirt"],
    # buzos_hoodies_y_sueteres
    "hoodie_con_cremallera": ["hoodie con cremallera", "zip hoodie", "hoodie zip", "full zip", "fullzip"],
    "hoodie_canguro": ["hoodie", "canguro"],
    "buzo_cuello_alto_half_zip": ["half zip", "halfzip", "half-zip"],
    "cardigan": ["cardigan"],
    "chaleco_tejido": ["chaleco"],
    "sueter_tejido": ["sueter", "sweater"],
    "buzo_polar": ["polar", "fleece"],
    "ruana_poncho": ["ruana", "poncho"],
    "saco_cuello_v": ["saco"],
    "buzo_cuello_redondo": ["buzo", "sweatshirt"],
    # chaquetas_y_abrigos
    "chaqueta_denim": ["denim", "jean"],
    "chaqueta_tipo_cuero_cuero_o_sintetico": ["cuero", "faux leather", "eco leather", "leather jacket"],
    "bomber": ["bomber", "estilo bomber"],
    "parka": ["parka"],
    "rompevientos": ["rompevientos", "windbreaker", "chaqueta"],
    "impermeable": ["impermeable", "raincoat"],
    "puffer_acolchada": ["puffer", "acolchada", "acolchado"],
    "trench_gabardina": ["trench", "gabardina"],
    "abrigo_largo": ["abrigo", "abrigo largo", "chaqueta larga", "long coat"],
    "chaleco_acolchado": ["chaleco acolchado", "puffer vest", "vest acolchado", "chaleco", "chalecos"],
    # blazers_y_sastreria
    "smoking_tuxedo_jacket": ["smoking", "tuxedo"],
    "chaleco_de_vestir": ["chaleco de vestir", "waistcoat", "vest"],
    "traje_sastre_conjunto_blazer_pantalon_falda": ["traje sastre", "conjunto sastre"],
    "pantalon_sastre": ["pantalon sastre", "pantalon de vestir", "tailored pants"],
    "falda_sastre": ["falda sastre", "falda de vestir"],
    "blazer_oversize": ["oversize", "over size"],
    "blazer_entallado": ["entallado", "fitted"],
    "blazer_clasico": ["blazer", "saco"],
    # vestidos
    "vestido_infantil": ["infantil", "nino", "nina", "bebe", "baby", "kids"],
    "vestido_camisero": ["camisero", "vestido camisero"],
    "vestido_sueter": ["sueter", "sweater", "sweater dress"],
    "vestido_coctel": ["coctel", "cocktail"],
    "vestido_formal_noche": ["formal", "noche", "gala"],
    "vestido_de_fiesta": ["fiesta", "party dress"],
    "vestido_de_verano": ["verano", "summer dress"],
    "vestido_midi": ["midi"],
    "vestido_maxi": ["maxi"],
    "vestido_mini": ["mini"],
    "vestido_casual": ["dress", "dresses", "vestido", "vestidos"],
    # enterizos_y_overoles
    "pelele_enterizo_bebe": ["pelele", "bebe", "baby"],
    "romper_jumpsuit_corto": ["romper", "jumpsuit corto", "enterizo corto"],
    "jumpsuit_largo": ["jumpsuit", "jumpsit", "enterizo largo", "enterizo"],
    "overol_denim": ["overol", "denim", "jean"],
    "jardinera_overall_tipo_tiras": ["jardinera"],
    "enterizo_deportivo": ["deportivo", "performance"],
    "enterizo_de_fiesta": ["fiesta", "noche", "formal"],
    # conjuntos_y_sets_2_piezas
    "conjunto_pijama": ["pijama"],
    "conjunto_deportivo_2_piezas": ["deportivo", "performance", "gym"],
    "set_bebe_2_3_piezas": ["bebe", "baby"],
    "set_formal_chaleco_pantalon_sastre": ["sastre", "formal", "chaleco"],
    "conjunto_matching_set_casual": ["set", "conjunto", "matching set"],
    # pantalones_no_denim
    "pantalon_chino": ["chino", "chinos"],
    "pantalon_cargo": ["cargo"],
    "jogger_casual": ["jogger"],
    "palazzo": ["palazzo", "wide leg", "pantalon ancho", "pantalones anchos"],
    "culotte": ["culotte"],
    "leggings_casual": ["leggins", "legging", "leggings"],
    "pantalon_de_lino": ["lino", "linen"],
    "pantalon_de_dril": ["dril", "sarga", "twill", "pantalon", "pantalones", "pants", "pant"],
    "pantalon_skinny_no_denim": ["skinny"],
    "pantalon_flare_no_denim": ["flare"],
    # jeans_y_denim
    "jean_skinny": ["skinny"],
    "jean_slim": ["slim"],
    "jean_straight": ["straight"],
    "jean_wide_leg": ["wide leg"],
    "jean_mom": ["mom"],
    "jean_boyfriend": ["boyfriend"],
    "jean_bootcut": ["bootcut"],
    "jean_flare": ["flare"],
    "jean_distressed_rotos": ["distressed", "rotos", "destroyed"],
    "jean_infantil": ["infantil", "kids", "kid", "nino", "nina", "bebe", "baby"],
    "jean_regular": ["jean", "jeans"],
    # shorts_y_bermudas
    "bermuda": ["bermuda"],
    "biker_short": ["biker"],
    "short_deportivo": ["deportivo", "sport"],
    "short_denim": ["denim", "jean"],
    "short_de_lino": ["lino", "linen"],
    "short_cargo": ["cargo"],
    "short_de_vestir": ["vestir", "tailored", "sastre"],
    "short_infantil": ["infantil", "kids", "kid", "nino", "nina"],
    "short_casual_algodon": ["short", "shorts"],
    # faldas
    "falda_short_skort": ["skort", "falda short"],
    "falda_denim": ["denim", "jean"],
    "falda_plisada": ["plisada", "pleated"],
    "falda_lapiz": ["lapiz", "pencil"],
    "falda_cruzada_wrap": ["wrap", "cruzada"],
    "falda_skater": ["skater"],
    "falda_tutu_nina": ["tutu"],
    "mini_falda": ["mini", "minifalda"],
    "falda_midi": ["midi", "falda", "skirt"],
    "falda_maxi": ["maxi"],
    # ropa_deportiva_y_performance
    "ropa_de_compresion": ["compresion", "compression"],
    "ropa_de_running": ["running", "half zip performance"],
    "ropa_de_ciclismo": ["ciclismo", "cycling"],
    "ropa_de_futbol_entrenamiento": ["futbol", "football"],
    "top_deportivo_bra_deportivo": ["top deportivo", "bra deportivo", "sports bra"],
    "leggings_deportivos": ["legging", "leggings"],
    "shorts_deportivos": ["short", "shorts"],
    "sudadera_pants_deportivos": ["pantalon", "pants", "jogger", "sudadera"],
    "chaqueta_deportiva": ["chaqueta", "jacket", "halfzip", "half zip"],
    "conjunto_deportivo": ["set", "conjunto"],
    "camiseta_deportiva": ["camiseta", "t shirt", "tshirt"],
    # ropa_interior_basica
    "brasier": ["brasier", "bra"],
    "bralette": ["bralette"],
    "panty_trusa": ["panty", "trusa", "cachetero", "cachetera", "hipster"],
    "tanga": ["tanga"],
    "brasilera": ["brasilera"],
    "boxer": ["boxer"],
    "brief": ["brief", "briefs"],
    # lenceria_y_fajas_shapewear
    "faja_cintura": ["faja cintura", "cinturilla"],
    "corse": ["corse", "corset"],
    "liguero": ["liguero"],
    # pijamas_y_ropa_de_descanso_loungewear
    "pijama_bebe": ["bebe", "baby"],
    "pijama_infantil": ["infantil", "kids", "kid", "nino", "nina"],
    "pijama_enteriza_onesie": ["onesie", "enteriza", "enterizo"],
    "bata_robe": ["bata", "robe"],
    "camison": ["camison", "batola"],
    "pijama_termica": ["termica", "thermal"],
    "short_pijama": ["short", "shorts"],
    "pantalon_pijama": ["pantalon", "capri"],
    "set_loungewear_jogger_buzo": ["loungewear", "jogger", "buzo"],
    "pijama_2_piezas": ["2 piezas", "dos piezas", "two piece"],
    # trajes_de_bano_y_playa
    "pareo": ["pareo", "sarong"],
    "tankini": ["tankini"],
    "trikini": ["trikini"],
    "bikini": ["bikini", "dos piezas", "2 piezas", "two piece", "two pieces", "thong", "ring bottom"],
    "vestido_de_bano_entero": ["vestido de bano entero", "traje de bano entero", "one piece", "una pieza"],
    "bermuda_boxer_de_bano": ["boxer de bano", "boxer bano", "bermuda de bano", "bermuda bano", "boardshort", "boardshorts"],
    "short_de_bano": ["short de bano", "short bano", "swim short", "swim shorts", "pantaloneta", "pantalonetas"],
    "rashguard_licra_uv": ["rashguard", "licra uv", "proteccion uv", "proteccion solar", "uv shirt"],
    "salida_de_bano_kaftan": ["salida de bano", "salida bano", "kaftan", "caftan", "coverup", "beach cover"],
    "traje_de_bano_infantil": ["infantil", "nino", "nina", "kids", "kid"],
    "panal_de_agua_bebe": ["panal", "panal de agua", "bebe", "baby"],
    # accesorios_textiles_y_medias
    "pantimedias_medias_veladas": ["pantimedia", "pantimedias", "media velada", "tights", "denier"],
    "medias_calcetines": ["calcetin", "calcetines", "medias", "sock", "socks", "soquete", "soquetes"],
    "cinturones": ["cinturon", "cinturones", "correa", "belt", "hebilla"],
    "corbatas": ["corbata", "neck tie", "necktie"],
    "pajaritas_monos": ["pajarita", "corbatin", "bow tie", "bowtie"],
    "bufandas": ["bufanda", "chalina", "scarf"],
    "panuelos_bandanas": ["panuelo", "panuelos", "panoleta", "bandana", "head scarf", "turbante"],
    "gorras": ["gorra", "cap", "snapback", "trucker", "visera"],
    "sombreros": ["sombrero", "bucket hat", "fedora", "panama"],
    "gorros_beanies": ["beanie", "balaclava", "pasamontanas", "gorro", "gorros"],
    # calzado
    "botas": ["botas", "bota"],
    "botines": ["botin", "botines"],
    "tenis_sneakers": ["tenis", "sneaker", "sneakers"],
    "zapatos_deportivos": ["deportivo", "sport", "training"],
    "zapatos_formales": ["oxford", "derby", "zapato formal", "zapatos formales", "zapato", "zapatos", "shoe", "shoes"],
    "sandalias": ["sandalia", "sandalias", "sandal", "sandals"],
    "tacones": ["tacon", "tacones", "heel", "heels"],
    "mocasines_loafers": ["mocasin", "mocasines", "loafer", "loafers"],
    "balerinas_flats": ["balerina", "balerinas", "flats"],
    "alpargatas_espadrilles": ["alpargata", "alpargatas", "espadrille", "espadrilles"],
    "zuecos": ["zueco", "zuecos"],
    "chanclas_flip_flops": ["chancla", "chanclas", "flip flop", "flip flops"],
    # bolsos_y_marroquineria
    "maletas_y_equipaje": ["maleta", "maletas", "equipaje", "trolley", "luggage", "suitcase"],
    "estuches_cartucheras_neceseres": ["cartuchera", "cartucheras", "estuche", "estuches", "neceser", "neceseres", "cosmetiquera", "pouch", "lapicera"],
    "portadocumentos_porta_pasaporte": ["porta pasaporte", "porta documentos", "portadocumentos", "passport"],
    "billetera": ["billetera", "monedero", "tarjetero", "wallet", "cardholder", "card holder", "money clip"],
    "cartera_bolso_de_mano": ["cartera", "bolso de mano", "handbag", "handbags", "baguette", "bag", "bags", "bolsa regalo"],
    "mochila": ["mochila", "backpack"],
    "morral": ["morral"],
    "rinonera_canguro": ["rinonera", "canguro"],
    "clutch_sobre": ["clutch"],
    "bolso_tote": ["tote", "canasto", "canastos", "basket"],
    "bolso_bandolera_crossbody": ["bandolera", "crossbody", "manos libres"],
    "bolso_de_viaje_duffel": ["duffel", "bolso de viaje"],
    # joyeria_y_bisuteria
    "relojes": ["reloj", "relojes", "watch", "watches"],
    "piercings": ["piercing", "piercings", "earcuff", "ear cuff", "barbell"],
    "aretes_pendientes": ["arete", "aretes", "pendiente", "pendientes", "candonga", "candongas", "topo", "topos", "earring", "earrings", "argolla", "argollas"],
    "collares": ["collar", "collares", "gargantilla", "cadena", "cadenas", "necklace", "necklaces", "choker", "chokers"],
    "pulseras_brazaletes": ["pulsera", "pulseras", "brazalete", "brazaletes", "bracelet", "bracelets", "bangle", "bangles"],
    "anillos": ["anillo", "anillos", "ring", "rings"],
    "tobilleras": ["tobillera", "tobilleras"],
    "dijes_charms": ["dije", "dijes", "charm", "charms", "pendant", "pendants"],
    "broches_prendedores": ["broche", "broches", "prendedor", "prendedores", "badge", "badges"],
    "sets_de_joyeria": ["set de joyeria", "sets de joyeria", "conjunto de joyeria"],
    # gafas_y_optica
    "gafas_opticas_formuladas": ["optica", "formuladas", "formulada", "prescripcion", "prescription"],
    "monturas": ["montura", "monturas", "frame", "frames"],
    "lentes_de_proteccion": ["lente de proteccion", "safety glasses"],
    "gafas_de_sol": ["gafas de sol", "lentes de sol", "sunglass", "sunglasses", "gafa", "gafas"],
    # hogar_y_lifestyle
    "velas_y_aromas": ["vela", "velas", "candle", "candles", "difusor", "difusores", "incienso", "room spray", "home spray"],
    "cocina_y_vajilla": ["plato", "platos", "plate", "plates", "vajilla", "taza", "tazas", "mug", "mugs", "bowl", "bowls", "copa de vino", "wine glass"],
    "textiles_de_mesa": ["mantel", "manteles", "individual", "individuales", "posavasos", "servilleta", "servilletas", "camino de mesa", "placemat", "napkin", "coaster"],
    "cojines_y_fundas": ["cojin", "cojines", "funda de cojin", "pillow", "pillows", "pillowcase"],
    "toallas_y_bano": ["toalla", "toallas", "bath towel"],
    "mantas_y_cobijas": ["manta", "mantas", "cobija", "cobijas", "blanket", "blankets"],
    "arte_y_posters": ["poster", "posters", "lamina", "laminas", "wall art", "ilustracion", "illustration"],
    "papeleria_y_libros": ["papeleria", "libro", "libros", "cuaderno", "cuadernos", "agenda", "agendas", "stationery", "notebook", "notebooks", "lapicero"],
    "termos_y_botellas": ["termo", "termos", "botilito", "botella", "botellas", "water bottle", "bottle"],
    "hogar_otros": ["mascota", "mascotas", "pet toy", "mousepad", "abanico"],
    # tarjeta_regalo
    "tarjeta_de_regalo": ["tarjeta regalo", "tarjeta de regalo", "gift card", "giftcard", "bono de regalo"],
}


# Category-specific heuristics applied to every subcategory of a category
JEWELRY_PLATING_KEYWORDS = ["gold plated", "silver plated", "banado en oro", "banado en plata", "chapado", "chapado en oro"]
SOCK_DISAMBIGUATORS = ["ankle socks", "ankle sock", "medias tobilleras", "calcetines tobilleros", "media tobillera"]
ANKLET_DISAMBIGUATORS = ["anklet", "anklets"]


# Words too common inside a category to justify a move between its subcategories
CATEGORY_GENERIC_TOKENS: Dict[str, List[str]] = {
    "camisetas_y_tops": ["top", "tops", "camiseta", "camisetas", "tshirt", "t", "shirt", "tee"],
    "camisas_y_blusas": ["camisa", "camisas", "blusa", "blusas", "shirt", "blouse", "blouses"],
    "buzos_hoodies_y_sueteres": ["buzo", "buzos"],
    "chaquetas_y_abrigos": ["chaqueta", "chaquetas", "jacket", "jackets", "coat"],
    "blazers_y_sastreria": ["blazer", "blazers", "saco"],
    "vestidos": ["vestido", "vestidos", "dress", "dresses"],
    "enterizos_y_overoles": ["enterizo", "enterizos"],
    "conjuntos_y_sets_2_piezas": ["conjunto", "conjuntos", "set", "sets"],
    "pantalones_no_denim": ["pantalon", "pantalones", "pants", "pant", "trouser", "trousers"],
    "jeans_y_denim": ["jean", "jeans", "denim"],
    "shorts_y_bermudas": ["short", "shorts"],
    "faldas": ["falda", "faldas", "skirt", "skirts"],
    "ropa_deportiva_y_performance": ["deportivo", "deportiva", "deportivos", "sport"],
    "ropa_interior_basica": ["interior"],
    "pijamas_y_ropa_de_descanso_loungewear": ["pijama", "pijamas"],
    "trajes_de_bano_y_playa": ["traje", "bano", "swimwear", "playa"],
    "accesorios_textiles_y_medias": ["accesorio", "accesorios"],
    "calzado": ["zapato", "zapatos", "shoe", "shoes", "calzado"],
    "bolsos_y_marroquineria": ["bolso", "bolsos", "bag", "bags"],
    "joyeria_y_bisuteria": [
        "joya", "joyas", "joyeria", "bisuteria", "oro", "plata", "gold", "silver",
        "plated", "banado", "chapado", "acero",
    ],
    "gafas_y_optica": ["gafas", "gafa", "lentes", "lente"],
    "hogar_y_lifestyle": ["hogar", "home"],
    "tarjeta_regalo": ["tarjeta"],
}

# Single-word keywords shared by this many subcategories become generic
GENERIC_SHARED_SUBCATEGORY_MIN = 3


# Hand-curated evidence a product must show before moving INTO a category
REQUIRED_CATEGORY_EVIDENCE: Dict[str, List[str]] = {
    "trajes_de_bano_y_playa": [
        "bikini", "bikinis", "trikini", "tankini", "traje de bano", "vestido de bano",
        "banador", "pareo", "rashguard", "swimwear", "swimsuit", "swim", "beachwear",
        "salida de bano", "pantaloneta", "boardshort", "boardshorts", "playa", "beach",
    ],
    "joyeria_y_bisuteria": [
        "joya", "joyas", "joyeria", "bisuteria", "jewelry", "arete", "aretes",
        "argolla", "argollas", "topo", "topos", "candonga", "anillo", "anillos",
        "collar", "collares", "gargantilla", "pulsera", "pulseras", "brazalete",
        "piercing", "dije", "dijes", "charm", "tobillera", "anklet", "reloj",
        "relojes", "earring", "earrings", "necklace", "bracelet", "broche",
    ],
    "calzado": [
        "zapato", "zapatos", "tenis", "sneaker", "sneakers", "sandalia", "sandalias",
        "tacon", "tacones", "bota", "botas", "botin", "botines", "mocasin",
        "mocasines", "loafer", "loafers", "alpargata", "alpargatas", "balerina",
        "balerinas", "zueco", "zuecos", "chancla", "chanclas", "calzado", "shoe",
        "shoes", "heels",
    ],
    "gafas_y_optica": [
        "gafas", "gafa", "lentes", "montura", "monturas", "optica", "sunglass",
        "sunglasses", "goggles",
    ],
    "hogar_y_lifestyle": [
        "hogar", "home", "decoracion", "vela", "velas", "difusor", "ambientador",
        "poster", "agenda", "cuaderno", "vajilla", "taza", "mug", "plato", "botella",
        "termo", "cojin", "toalla", "manta", "cobija", "mantel", "mascota",
    ],
    "tarjeta_regalo": ["tarjeta regalo", "tarjeta de regalo", "gift card", "giftcard", "bono de regalo"],
    "jeans_y_denim": ["jean", "jeans", "denim"],
    "ropa_interior_basica": [
        "ropa interior", "underwear", "brasier", "bra", "bralette", "panty",
        "cachetero", "cachetera", "trusa", "tanga", "brasilera", "boxer", "brief", "briefs",
    ],
    "lenceria_y_fajas_shapewear": [
        "lenceria", "lingerie", "faja", "fajas", "shapewear", "corset", "corse",
        "liguero", "babydoll", "baby doll", "cinturilla",
    ],
    "pijamas_y_ropa_de_descanso_loungewear": [
        "pijama", "pijamas", "pyjama", "pajama", "sleepwear", "loungewear", "bata",
        "robe", "camison", "batola", "onesie",
    ],
    "bolsos_y_marroquineria": [
        "bolso", "bolsos", "bolsa", "cartera", "carteras", "mochila", "morral",
        "rinonera", "canguro", "crossbody", "bandolera", "clutch", "billetera",
        "monedero", "tarjetero", "wallet", "estuche", "neceser", "cosmetiquera",
        "maleta", "equipaje", "duffel", "tote", "bag", "bags", "handbag",
    ],
    "accesorios_textiles_y_medias": [
        "medias", "media velada", "pantimedia", "pantimedias", "calcetin", "calcetines",
        "sock", "socks", "bufanda", "panuelo", "bandana", "gorra", "gorro", "beanie",
        "sombrero", "cinturon", "cinturones", "belt", "corbata", "pajarita",
        "corbatin", "diadema", "balaca", "scarf", "cap",
    ],
}


# Hand-curated evidence a product must show before moving INTO a subcategory
REQUIRED_SUBCATEGORY_EVIDENCE: Dict[str, List[str]] = {
    "bikini": ["bikini", "bikinis", "dos piezas", "2 piezas", "two piece", "thong"],
    "vestido_de_bano_entero": ["vestido de bano entero", "traje de bano entero", "one piece", "una pieza", "entero", "entera"],
    "relojes": ["reloj", "relojes", "watch", "watches", "smartwatch"],
    "gafas_de_sol": ["gafas de sol", "lentes de sol", "sunglass", "sunglasses", "polarizadas", "uv400"],
    "medias_calcetines": ["medias", "calcetin", "calcetines", "sock", "socks", "soquete", "soquetes"],
    "tobilleras": ["tobillera", "tobilleras", "anklet", "anklets"],
    "vestido_infantil": ["infantil", "nino", "nina", "bebe", "baby", "kids"],
    "jean_infantil": ["infantil", "nino", "nina", "bebe", "baby", "kids", "kid"],
    "short_infantil": ["infantil", "nino", "nina", "kids", "kid"],
    "pijama_infantil": ["infantil", "nino", "nina", "kids", "kid"],
    "traje_de_bano_infantil": ["infantil", "nino", "nina", "kids", "kid"],
    "tarjeta_de_regalo": ["tarjeta regalo", "tarjeta de regalo", "gift card", "giftcard", "bono de regalo"],
}


# Gender cue vocabulary
GENDER_FEMALE_KEYWORDS = [
    "mujer", "mujeres", "women", "womens", "dama", "damas", "ladies", "female",
    "femenina", "femenino", "para mujer", "de mujer",
]
GENDER_MALE_KEYWORDS = [
    "hombre", "hombres", "men", "mens", "caballero", "caballeros", "male",
    "masculino", "masculina", "para hombre", "de hombre",
]
GENDER_UNISEX_KEYWORDS = ["unisex", "genderless", "sin genero", "genero neutro", "gender neutral"]
GENDER_CHILD_STRICT_KEYWORDS = ["infantil", "kids", "kid", "newborn", "toddler", "0 24 meses"]
GENDER_CHILD_NAME_KEYWORDS = ["nino", "nina", "ninos", "ninas"]
GENDER_CHILD_BABY_KEYWORDS = ["baby", "bebe"]
GENDER_CHILD_COLOR_KEYWORDS = ["baby blue", "baby pink", "baby rose", "baby pastel", "azul baby", "rosa baby"]
GENDER_CHILD_ADULT_FALSE_POSITIVES = ["baby doll", "babydoll", "baby tee"]
GENDER_FEMALE_PRODUCT_KEYWORDS = [
    "brasier", "bralette", "panty", "cachetero", "cachetera", "brasilera", "bikini",
    "vestido de bano entero", "traje de bano entero",
]
GENDER_MALE_PRODUCT_KEYWORDS = ["boxer de hombre", "boxer hombre", "traje de bano hombre", "bermuda de bano hombre"]

# Relative trust in each evidence source for gender cues
GENDER_SOURCE_WEIGHTS: Dict[str, float] = {
    "name": 4.4,
    "seo_tags": 5.2,
    "seo_title": 3.2,
    "seo_description": 2.4,
    "url": 1.8,
    "description": 1.3,
    "vendor": 2.0,
}

# Category priors for gender inference
FEMININE_PRIOR_CATEGORIES = frozenset({"vestidos", "lenceria_y_fajas_shapewear", "faldas"})
NEUTRAL_PRIOR_CATEGORIES = frozenset({
    "joyeria_y_bisuteria",
    "bolsos_y_marroquineria",
    "accesorios_textiles_y_medias",
    "gafas_y_optica",
    "hogar_y_lifestyle",
    "tarjeta_regalo",
})
