import dataclasses


class FromDict:
    @classmethod
    def from_dict(cls, env):
        """
        Build the dataclass from a dict, keys that are not init fields are dropped
        so a whole settings dict can be passed in
        """
        params = {f.name for f in dataclasses.fields(cls) if f.init}
        return cls(**{
            k: v for k, v in env.items()
            if k in params
        })

    def settings_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in dataclasses.fields(self) if f.name[0] != "_"}
