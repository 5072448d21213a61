# Routes package - registers all blueprints with the Flask app

def register_blueprints(app):
    """Register all route blueprints with the Flask app."""
    from .compat import compat_bp, init_compat_state

    app.register_blueprint(compat_bp)

    # Hand the app's catalog cache to the compatibility routes
    import app as app_module
    if hasattr(app_module, 'catalog_cache'):
        init_compat_state(app_module.catalog_cache)
