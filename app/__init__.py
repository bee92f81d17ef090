"""
Paquete `app`: backend REST de perfiles de desarrolladores.

Grupos de rutas:
    /api/users    registro
    /api/auth     login y usuario actual
    /api/profile  perfiles, experiencia, educación y repos de GitHub
    /api/posts    posts, likes y comentarios
"""
