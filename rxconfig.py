import reflex as rx


class GatehouseConfig(rx.Config):
    pass


config = GatehouseConfig(
    app_name="gatehouse",
    env=rx.Env.DEV,
)
