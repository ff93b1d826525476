"""Shared constants for the wpprov provisioner."""

from pathlib import Path

# VVV defaults (overridable via ProvisionerSettings / env vars)
VVV_CONFIG_PATH = Path("/vagrant/config.yml")
GLOBAL_BACKUP_DIR = Path("/srv/database/backups")
SANDBOX_USER = "vagrant"

# Site tree (relative to the site root)
PUBLIC_HTML_DIR = "public_html"
LOG_DIR = "log"
PROVISION_DIR = "provision"
LOCAL_DUMP_PATH = "public_html/wp-content/database.sql"
NGINX_LOG_FILES = ("nginx-error.log", "nginx-access.log")

# nginx templates (relative to provision/)
NGINX_CUSTOM_TEMPLATE = "vvv-nginx-custom.conf"
NGINX_DEFAULT_TEMPLATE = "vvv-nginx-default.conf"
NGINX_OUTPUT = "vvv-nginx.conf"
LIVE_URL_PLACEHOLDER = "{{LIVE_URL}}"

# MySQL
DB_ROOT_USER = "root"
DB_ROOT_PASSWORD = "root"
DB_USER = "wp"
DB_PASSWORD = "wp"
DB_HOST = "localhost"

# Site defaults
DEFAULT_WP_VERSION = "latest"
DEFAULT_LOCALE = "en_US"
DEFAULT_INSTALL_MODE = "single"
DEFAULT_DB_PREFIX = "wp_"
DEFAULT_ADMIN_USER = "admin"
DEFAULT_ADMIN_PASSWORD = "password"
DEFAULT_ADMIN_EMAIL = "admin@local.test"

# Characters stripped from database names
DB_NAME_FORBIDDEN = "\\/.<>:\"'|?!*"

# Fresh-install customization
DEFAULT_PLUGINS = ("akismet", "hello")
DEFAULT_THEMES = ("twentyseventeen", "twentynineteen")
TEST_CONTENT_URL = "https://raw.githubusercontent.com/poststatus/wptest/master/wptest.xml"
TEST_CONTENT_FILE = "import.xml"
IMPORTER_PLUGIN = "wordpress-importer"

BASE_SETUP_PAGES = ("Home", "About", "Contact", "Blog")
BASE_SETUP_MENU = "Main Navigation"
BASE_SETUP_MENU_SLUG = "main-navigation"
BASE_SETUP_MENU_LOCATION = "primary"
BASE_SETUP_CATEGORY = "News"
BASE_SETUP_OPTIONS = (
    ("date_format", "j F Y"),
    ("links_updated_date_format", "F j, Y g:i a"),
    ("timezone_string", "America/New_York"),
    ("permalink_structure", "/%postname%/"),
)
BASE_SETUP_ADDED_OPTIONS = (
    ("rg_gforms_enable_akismet", "1"),
    ("rg_gforms_currency", "USD"),
)

# custom config key -> option name, for secrets seeded by the base setup
SECRET_OPTION_KEYS = {
    "acfprolicense": "acf_pro_license",
    "wordpressapikey": "wordpress_api_key",
    "rggformskey": "rg_gforms_key",
}
