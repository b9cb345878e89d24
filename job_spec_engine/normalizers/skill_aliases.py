"""
Skill alias dictionary and canonicalization.

Every canonical name is lowercase alphanumeric and is listed first among its
own aliases, so canonicalizing a canonical name returns it unchanged.
Matching is case-insensitive; unknown skills are reduced to their
alphanumeric characters rather than rejected.
"""

import re
from types import MappingProxyType
from typing import Dict, List, Mapping

SKILL_ALIASES: Mapping[str, List[str]] = MappingProxyType({
    # ---- JavaScript ecosystem ----
    "javascript": [
        "javascript", "js", "ecmascript", "es6", "es2015", "es2016", "es2017",
        "es2018", "es2019", "es2020", "es2021", "es2022", "es2023",
        "vanilla js", "vanilla javascript",
    ],
    "typescript": ["typescript", "ts", "type script"],
    "nodejs": ["nodejs", "node.js", "node js", "node"],
    "react": ["react", "reactjs", "react.js", "react js"],
    "nextjs": ["nextjs", "next.js", "next js", "next"],
    "vue": ["vue", "vuejs", "vue.js", "vue js", "vue2", "vue3"],
    "nuxt": ["nuxt", "nuxtjs", "nuxt.js", "nuxt js"],
    "angular": ["angular", "angularjs", "angular.js", "angular js", "angular2", "angular 2"],
    "svelte": ["svelte", "sveltejs", "svelte.js"],
    "express": ["express", "expressjs", "express.js"],
    "nestjs": ["nestjs", "nest.js", "nest js", "nest"],
    "deno": ["deno", "denojs"],
    "bun": ["bun", "bunjs"],
    # ---- Styling ----
    "css": ["css", "css3", "cascading style sheets"],
    "html": ["html", "html5"],
    "sass": ["sass", "scss"],
    "less": ["less", "lesscss"],
    "tailwindcss": ["tailwindcss", "tailwind css", "tailwind"],
    "bootstrap": ["bootstrap", "bootstrap5", "bootstrap4", "bootstrap 5", "bootstrap 4"],
    "styledcomponents": ["styledcomponents", "styled-components", "styled components"],
    "emotion": ["emotion", "@emotion"],
    # ---- Python ecosystem ----
    "python": ["python", "python3", "python2", "py"],
    "django": ["django", "django rest framework", "drf"],
    "flask": ["flask"],
    "fastapi": ["fastapi", "fast api"],
    "pandas": ["pandas"],
    "numpy": ["numpy"],
    "pytorch": ["pytorch", "torch"],
    "tensorflow": ["tensorflow"],
    "scikitlearn": ["scikitlearn", "scikit-learn", "scikit learn", "sklearn"],
    # ---- Databases ----
    "postgresql": ["postgresql", "postgres", "pg", "psql"],
    "mysql": ["mysql", "mariadb"],
    "mongodb": ["mongodb", "mongo"],
    "redis": ["redis"],
    "elasticsearch": ["elasticsearch", "elastic search", "elastic", "es"],
    "sqlite": ["sqlite", "sqlite3"],
    "supabase": ["supabase"],
    "firebase": ["firebase", "firestore"],
    "dynamodb": ["dynamodb", "dynamo db", "dynamo"],
    "cassandra": ["cassandra", "apache cassandra"],
    # ---- ORMs / query builders ----
    "prisma": ["prisma", "prisma orm"],
    "drizzle": ["drizzle", "drizzle orm"],
    "typeorm": ["typeorm", "type orm"],
    "sequelize": ["sequelize"],
    "knex": ["knex", "knexjs"],
    "sqlalchemy": ["sqlalchemy", "sql alchemy"],
    # ---- Cloud ----
    "aws": ["aws", "amazon web services", "amazon aws"],
    "gcp": ["gcp", "google cloud", "google cloud platform"],
    "azure": ["azure", "microsoft azure", "ms azure"],
    "vercel": ["vercel"],
    "netlify": ["netlify"],
    "heroku": ["heroku"],
    "digitalocean": ["digitalocean", "digital ocean", "do"],
    "cloudflare": ["cloudflare", "cloud flare"],
    # ---- DevOps ----
    "docker": ["docker", "dockerfile", "docker-compose", "docker compose"],
    "kubernetes": ["kubernetes", "k8s", "kube"],
    "terraform": ["terraform", "tf"],
    "ansible": ["ansible"],
    "jenkins": ["jenkins"],
    "githubactions": ["githubactions", "github actions", "github-actions"],
    "gitlab": ["gitlab", "gitlab ci", "gitlab-ci"],
    "circleci": ["circleci", "circle ci"],
    "git": ["git", "github", "bitbucket"],
    # ---- Testing ----
    "jest": ["jest"],
    "vitest": ["vitest"],
    "mocha": ["mocha"],
    "cypress": ["cypress", "cypress.io"],
    "playwright": ["playwright"],
    "selenium": ["selenium", "selenium webdriver"],
    "pytest": ["pytest"],
    # ---- APIs / protocols ----
    "rest": ["rest", "restful", "rest api", "restful api"],
    "graphql": ["graphql", "graph ql", "gql"],
    "grpc": ["grpc", "g-rpc"],
    "websocket": ["websocket", "websockets", "ws", "socket.io", "socketio"],
    "trpc": ["trpc", "t-rpc"],
    # ---- Mobile ----
    "reactnative": ["reactnative", "react native", "react-native", "rn"],
    "flutter": ["flutter"],
    "swift": ["swift", "swiftui"],
    "kotlin": ["kotlin"],
    "ios": ["ios", "iphone", "ipad"],
    "android": ["android"],
    # ---- Other languages ----
    "java": ["java", "java8", "java11", "java17"],
    "csharp": ["csharp", "c#", "c sharp", "dotnet", ".net", "asp.net"],
    "go": ["go", "golang"],
    "rust": ["rust", "rustlang"],
    "ruby": ["ruby", "rails", "ruby on rails", "ror"],
    "php": ["php", "laravel", "symfony"],
    "scala": ["scala"],
    "elixir": ["elixir", "phoenix"],
    "clojure": ["clojure", "clojurescript"],
    "haskell": ["haskell"],
    "cpp": ["cpp", "c++", "cplusplus"],
    "c": ["c", "c language"],
    # ---- AI / ML ----
    "machinelearning": ["machinelearning", "machine learning", "ml"],
    "deeplearning": ["deeplearning", "deep learning", "dl"],
    "nlp": ["nlp", "natural language processing"],
    "computervision": ["computervision", "computer vision", "cv"],
    "openai": ["openai", "chatgpt", "gpt", "gpt-4", "gpt-3"],
    "langchain": ["langchain", "lang chain"],
    # ---- Data ----
    "sql": ["sql", "structured query language"],
    "dataanalysis": ["dataanalysis", "data analysis", "data analytics"],
    "dataengineering": ["dataengineering", "data engineering"],
    "etl": ["etl", "extract transform load"],
    "tableau": ["tableau"],
    "powerbi": ["powerbi", "power bi"],
    "looker": ["looker"],
    "dbt": ["dbt", "data build tool"],
    "airflow": ["airflow", "apache airflow"],
    "spark": ["spark", "apache spark", "pyspark"],
    "kafka": ["kafka", "apache kafka"],
    # ---- Design ----
    "figma": ["figma"],
    "sketch": ["sketch"],
    "adobexd": ["adobexd", "adobe xd", "xd"],
    "ui": ["ui", "ui design", "user interface"],
    "ux": ["ux", "ux design", "user experience"],
    # ---- Soft skills ----
    "agile": ["agile", "scrum", "kanban", "agile methodology"],
    "leadership": ["leadership", "team lead", "tech lead"],
    "communication": ["communication", "written communication", "verbal communication"],
})


def _build_alias_index(table: Mapping[str, List[str]]) -> Mapping[str, str]:
    index: Dict[str, str] = {}
    for canonical, aliases in table.items():
        for alias in aliases:
            key = alias.lower()
            if key in index and index[key] != canonical:
                raise ValueError(f"Alias {alias!r} maps to both {index[key]!r} and {canonical!r}")
            index[key] = canonical
    return MappingProxyType(index)


# alias -> canonical, built once at import
ALIAS_TO_CANONICAL: Mapping[str, str] = _build_alias_index(SKILL_ALIASES)

_NON_ALNUM = re.compile(r"[^a-z0-9]")

_ACRONYMS = frozenset({
    "js", "ts", "css", "html", "sql", "api", "aws", "gcp", "ui", "ux",
    "ml", "ai", "nlp", "etl", "ci", "cd", "php", "dbt",
})

_SPECIAL_CASES: Mapping[str, str] = MappingProxyType({
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "nodejs": "Node.js",
    "nextjs": "Next.js",
    "vuejs": "Vue.js",
    "nestjs": "NestJS",
    "reactjs": "React",
    "reactnative": "React Native",
    "postgresql": "PostgreSQL",
    "mongodb": "MongoDB",
    "graphql": "GraphQL",
    "grpc": "gRPC",
    "trpc": "tRPC",
    "mysql": "MySQL",
    "sqlite": "SQLite",
    "sqlalchemy": "SQLAlchemy",
    "dynamodb": "DynamoDB",
    "typeorm": "TypeORM",
    "csharp": "C#",
    "cpp": "C++",
    "ios": "iOS",
    "macos": "macOS",
    "github": "GitHub",
    "githubactions": "GitHub Actions",
    "gitlab": "GitLab",
    "circleci": "CircleCI",
    "digitalocean": "DigitalOcean",
    "bitbucket": "Bitbucket",
    "linkedin": "LinkedIn",
    "tailwindcss": "Tailwind CSS",
    "styledcomponents": "styled-components",
    "openai": "OpenAI",
    "chatgpt": "ChatGPT",
    "fastapi": "FastAPI",
    "pytorch": "PyTorch",
    "tensorflow": "TensorFlow",
    "numpy": "NumPy",
    "scikitlearn": "scikit-learn",
    "langchain": "LangChain",
    "powerbi": "Power BI",
    "adobexd": "Adobe XD",
    "machinelearning": "Machine Learning",
    "deeplearning": "Deep Learning",
    "computervision": "Computer Vision",
    "dataanalysis": "Data Analysis",
    "dataengineering": "Data Engineering",
    "websocket": "WebSocket",
})


def to_canonical_skill_name(skill_name: str) -> str:
    """
    Map a free-text skill name to its canonical identifier.

    Trim and lowercase, then look up the alias table. Unknown names are
    stripped to alphanumerics; if that stripped form is itself a known alias
    its canonical name is used, otherwise the stripped form is returned.

    >>> to_canonical_skill_name("Next.js")
    'nextjs'
    >>> to_canonical_skill_name("My Custom Skill")
    'mycustomskill'
    """
    normalized = (skill_name or "").strip().lower()
    canonical = ALIAS_TO_CANONICAL.get(normalized)
    if canonical:
        return canonical
    stripped = _NON_ALNUM.sub("", normalized)
    return ALIAS_TO_CANONICAL.get(stripped, stripped)


def _capitalize_skill_name(name: str) -> str:
    lower = name.lower()
    if lower in _SPECIAL_CASES:
        return _SPECIAL_CASES[lower]
    if lower in _ACRONYMS:
        return name.upper()
    return name[:1].upper() + name[1:].lower()


def get_skill_display_name(canonical_name: str) -> str:
    """Display form for a canonical skill; falls back to capitalizing the identifier."""
    aliases = SKILL_ALIASES.get(canonical_name)
    if aliases:
        return _capitalize_skill_name(aliases[0])
    return _capitalize_skill_name(canonical_name)
