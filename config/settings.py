from pathlib import Path
import environ

# ==============================================================================
# 1. SETUP BÁSICO E VARIÁVEIS DE AMBIENTE
# ==============================================================================

BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    BIBLE_TIMEOUT=(float, 5.0),
)

environ.Env.read_env(BASE_DIR / '.env')

SECRET_KEY = env('SECRET_KEY', default='django-insecure-preachfy-dev-key-troque-em-producao')

DEBUG = env('DEBUG')

ALLOWED_HOSTS = env.list('ALLOWED_HOSTS', default=['*'] if DEBUG else [])

# ==============================================================================
# 2. DEFINIÇÃO DE APLICATIVOS
# ==============================================================================

INSTALLED_APPS = [
    # servidor ASGI (precisa vir antes do staticfiles para o runserver)
    'daphne',
    # meus app
    'users',
    # outros
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    # CORS para o cliente Next.js
    'corsheaders',
    # Configuração do Channels
    'channels',
    # meus app (continua)
    'core',
    'sermons.apps.SermonsConfig',
    'bible',
    'insights',
    'community',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'

# ==============================================================================
# 3. BANCO DE DADOS (SQLite local, PostgreSQL em produção via DATABASE_URL)
# ==============================================================================

DATABASES = {
    'default': env.db('DATABASE_URL', default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
}

# ==============================================================================
# 4. VALIDAÇÃO DE SENHA
# ==============================================================================

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator', },
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator', },
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator', },
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator', },
]

# ==============================================================================
# 5. INTERNACIONALIZAÇÃO (PT-BR)
# ==============================================================================

LANGUAGE_CODE = 'pt-br'

TIME_ZONE = 'America/Sao_Paulo'

USE_I18N = True

USE_TZ = True

# ==============================================================================
# 6. ARQUIVOS ESTÁTICOS (apenas o admin usa)
# ==============================================================================

STATIC_URL = 'static/'

STATIC_ROOT = BASE_DIR / "staticfiles"

# ==============================================================================
# 7. CHAVE PRIMÁRIA PADRÃO
# ==============================================================================

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# ==============================================================================
# 8. CONFIGURAÇÕES DE AUTENTICAÇÃO
# ==============================================================================

# O login acontece no provedor OAuth do cliente; aqui só guardamos o usuário.
AUTH_USER_MODEL = 'users.CustomUser'

# ==============================================================================
# 9. CORS (cliente SPA em outra origem)
# ==============================================================================

CORS_ALLOW_ALL_ORIGINS = env.bool('CORS_ALLOW_ALL_ORIGINS', default=DEBUG)

CORS_ALLOWED_ORIGINS = env.list('CORS_ALLOWED_ORIGINS', default=[])

# ==============================================================================
# 10. CONFIGURAÇÕES DO DJANGO CHANNELS (Tempo Real)
# ==============================================================================

ASGI_APPLICATION = 'config.asgi.application'

REDIS_URL = env('REDIS_URL', default=None)

if REDIS_URL:
    CHANNEL_LAYERS = {
        'default': {
            'BACKEND': 'channels_redis.pubsub.RedisPubSubChannelLayer',
            'CONFIG': {
                "hosts": [REDIS_URL],
            },
        },
    }
else:
    # Desenvolvimento e testes: um único processo, sem Redis
    CHANNEL_LAYERS = {
        'default': {
            'BACKEND': 'channels.layers.InMemoryChannelLayer',
        },
    }

# ==============================================================================
# 11. PROVEDORES DE TEXTO BÍBLICO
# ==============================================================================

# Provedor A: bolls.life (ids numéricos de livro, retorna lista com HTML)
BIBLE_PRIMARY_URL = env('BIBLE_PRIMARY_URL', default='https://bolls.life')

# Provedor B: abibliadigital (aceita token Bearer opcional)
BIBLE_API_URL = env('BIBLE_API_URL', default='https://www.abibliadigital.com.br/api')
BIBLE_API_TOKEN = env('BIBLE_API_TOKEN', default=None)

# Último recurso: bible-api.com (apenas tradução "almeida")
BIBLE_FALLBACK_URL = env('BIBLE_FALLBACK_URL', default='https://bible-api.com')

# Timeout por chamada, em segundos (mantido entre 5 e 10)
BIBLE_TIMEOUT = min(max(env('BIBLE_TIMEOUT'), 5.0), 10.0)

# ==============================================================================
# 12. LOGGING
# ==============================================================================

LOG_LEVEL = env('LOG_LEVEL', default='INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'padrao': {
            'format': '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'padrao',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
    },
}
