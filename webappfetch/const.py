MANIFEST_FILENAME = 'webapps.json'
WEBAPP_CONFIG_FILENAME = 'configuration.json'
MENU_TEMPLATE_PATH = 'src/template/partial/menu.hbs'
MENU_MARKER = '<!-- webapps -->'
MENU_ITEM_TEMPLATE = (
    '<li><a class="red-text menu-listing-internal" href="/$webappName">$title</a></li>'
)
DEFAULT_HOST_BUILD_COMMAND = 'npm run build'
DIST_WEBAPPS_DIR = 'webapps'
