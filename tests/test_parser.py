"""Section state machine, field interpretation and cross-reference tests."""

import logging

import pytest

from scenefile.config import ParserConfig
from scenefile.lighting import LightType
from scenefile.parser import (
    ParseContext,
    ParserState,
    parse_scene_text,
    process_line,
    resolve_index,
)
from scenefile.textures import Texture
from scenefile.vector import Vector3


def _wrap_resources(body: str) -> str:
    return f"[scene]\n[resources]\n{body}\n[/resources]\n[/scene]\n"


def _wrap_objects(resources: str, objects: str) -> str:
    return f"[scene]\n[resources]\n{resources}\n[/resources]\n[objects]\n{objects}\n[/objects]\n[/scene]\n"


def _wrap_lights(body: str) -> str:
    return f"[scene]\n[lights]\n{body}\n[/lights]\n[/scene]\n"


class TestStateTransitions:
    def test_initial_state(self):
        assert ParseContext().state is ParserState.OUTSIDE

    @pytest.mark.parametrize(
        "start, line, expected",
        [
            (ParserState.OUTSIDE, "[scene]", ParserState.SCENE),
            (ParserState.SCENE, "[resources]", ParserState.RESOURCES),
            (ParserState.SCENE, "[objects]", ParserState.OBJECTS),
            (ParserState.SCENE, "[lights]", ParserState.LIGHTS),
            (ParserState.SCENE, "[/scene]", ParserState.OUTSIDE),
            (ParserState.RESOURCES, "[texture]", ParserState.IN_TEXTURE),
            (ParserState.RESOURCES, "[mesh]", ParserState.IN_MESH),
            (ParserState.RESOURCES, "[material]", ParserState.IN_MATERIAL),
            (ParserState.RESOURCES, "[/resources]", ParserState.SCENE),
            (ParserState.OBJECTS, "[obj]", ParserState.IN_OBJECT),
            (ParserState.OBJECTS, "[/objects]", ParserState.SCENE),
            (ParserState.LIGHTS, "[light]", ParserState.IN_LIGHT),
            (ParserState.LIGHTS, "[/lights]", ParserState.SCENE),
            (ParserState.IN_TEXTURE, "[/texture]", ParserState.RESOURCES),
            (ParserState.IN_MESH, "[/mesh]", ParserState.RESOURCES),
            (ParserState.IN_MATERIAL, "[/material]", ParserState.RESOURCES),
            (ParserState.IN_OBJECT, "[/obj]", ParserState.OBJECTS),
            (ParserState.IN_LIGHT, "[/light]", ParserState.LIGHTS),
        ],
    )
    def test_recognized_tags(self, start, line, expected):
        ctx = ParseContext(state=start)
        assert process_line(ctx, line) is expected
        assert ctx.state is expected

    @pytest.mark.parametrize(
        "start, line",
        [
            (ParserState.OUTSIDE, "[resources]"),
            (ParserState.OUTSIDE, "[/scene]"),
            (ParserState.SCENE, "[texture]"),
            (ParserState.SCENE, "name=x"),
            (ParserState.OBJECTS, "[/texture]"),
            (ParserState.OBJECTS, "[light]"),
            (ParserState.LIGHTS, "[obj]"),
            (ParserState.RESOURCES, "[SCENE]"),
            (ParserState.IN_TEXTURE, "[/mesh]"),
            (ParserState.IN_TEXTURE, "[texture]"),
            (ParserState.IN_LIGHT, "[/lights]"),
        ],
    )
    def test_unrecognized_lines_keep_state(self, start, line):
        ctx = ParseContext(state=start)
        assert process_line(ctx, line) is start
        assert ctx.model.is_empty()

    def test_tag_with_attribute_is_not_a_tag(self):
        ctx = ParseContext()
        process_line(ctx, "[scene name=x]")
        assert ctx.state is ParserState.OUTSIDE

    def test_close_tag_commits_and_resets_pending(self):
        ctx = ParseContext(state=ParserState.IN_TEXTURE)
        process_line(ctx, "name=a")
        process_line(ctx, "file=a.png")
        process_line(ctx, "[/texture]")
        assert ctx.model.textures == [Texture(file="a.png", name="a")]
        assert ctx.pending.texture == Texture()

        process_line(ctx, "[texture]")
        process_line(ctx, "name=b")
        process_line(ctx, "[/texture]")
        assert [t.name for t in ctx.model.textures] == ["a", "b"]
        assert ctx.model.textures[1].file == ""

    def test_contexts_are_independent(self):
        a = ParseContext()
        b = ParseContext()
        process_line(a, "[scene]")
        assert b.state is ParserState.OUTSIDE


class TestMinimalScene:
    def test_counts_and_references(self, minimal_scene_text):
        model = parse_scene_text(minimal_scene_text)
        assert model.counts() == {"textures": 1, "meshes": 1, "materials": 1, "objects": 1, "lights": 1}

        mat = model.materials[0]
        assert mat.diffuse_tex == 0
        assert mat.normal_tex == 0
        assert mat.color == Vector3(0.5, 0.25, 1.0)
        assert mat.spec_size == pytest.approx(16.0)

        obj = model.objects[0]
        assert obj.name == "box"
        assert obj.mesh == 0
        assert obj.material == 0
        assert obj.position == Vector3(1.0, 2.0, 3.0)
        assert obj.orientation == Vector3(0.0, 0.0, 0.0)
        assert obj.scale == Vector3(1.0, 1.0, 1.0)

        light = model.lights[0]
        assert light.type is LightType.SPOT
        assert light.shadows is True
        assert light.direction == Vector3(0.0, -1.0, 0.0)

    def test_comment_lines_do_not_change_model(self, minimal_scene_text):
        commented = "\n".join(
            f"{line}\n// comment {i}\n   // indented\n/" for i, line in enumerate(minimal_scene_text.splitlines())
        )
        baseline = parse_scene_text(minimal_scene_text)
        assert parse_scene_text("// header\n" + commented) == baseline


class TestDefaults:
    def test_material_defaults(self):
        model = parse_scene_text(_wrap_resources("[material]\n[/material]"))
        mat = model.materials[0]
        assert mat.name == ""
        assert mat.color == Vector3(1.0, 1.0, 1.0)
        assert mat.spec_size == 0.0
        assert mat.diffuse_tex is None
        assert mat.normal_tex is None

    def test_object_defaults(self):
        model = parse_scene_text("[scene]\n[objects]\n[obj]\n[/obj]\n[/objects]\n[/scene]")
        obj = model.objects[0]
        assert obj.position == Vector3.zeros()
        assert obj.orientation == Vector3.zeros()
        assert obj.scale == Vector3.ones()
        assert obj.mesh is None
        assert obj.material is None

    def test_light_defaults(self):
        light = parse_scene_text(_wrap_lights("[light]\n[/light]")).lights[0]
        assert light.type is LightType.POINT
        assert light.diffuse_color == Vector3.ones()
        assert light.specular_color == Vector3.ones()
        assert light.diffuse_intensity == 1.0
        assert light.specular_intensity == 1.0
        assert light.position == Vector3.zeros()
        assert light.range == 64.0
        assert light.direction == Vector3.zeros()
        assert light.shadows is True
        assert light.shadow_bias == pytest.approx(0.00001)
        assert light.cone_inner_angle == 10.0
        assert light.cone_outer_angle == 12.0


class TestFieldInterpretation:
    def test_vector_field(self):
        model = parse_scene_text(_wrap_resources("[material]\ncolor=1,2,3\n[/material]"))
        assert model.materials[0].color == Vector3(1.0, 2.0, 3.0)

    def test_wrong_arity_vector_leaves_default(self):
        model = parse_scene_text(_wrap_resources("[material]\ncolor=1,2\n[/material]"))
        assert model.materials[0].color == Vector3(1.0, 1.0, 1.0)

    def test_wrong_arity_vector_leaves_prior_value(self):
        model = parse_scene_text(_wrap_resources("[material]\ncolor=0,0.5,0\ncolor=9,9\n[/material]"))
        assert model.materials[0].color == Vector3(0.0, 0.5, 0.0)

    def test_unparsable_float_is_zero(self):
        model = parse_scene_text(_wrap_resources("[material]\nspecSize=shiny\n[/material]"))
        assert model.materials[0].spec_size == 0.0

    def test_non_ascii_digits_are_not_numbers(self):
        model = parse_scene_text(_wrap_resources("[material]\nspecSize=\u0663\n[/material]"))
        assert model.materials[0].spec_size == 0.0

    def test_hex_float_field(self):
        light = parse_scene_text(_wrap_lights("[light]\nrange=0x10\n[/light]")).lights[0]
        assert light.range == 16.0

    @pytest.mark.parametrize(
        "value, expected",
        [("yes", True), ("true", True), ("1", True), ("0", False), ("banana", False), ("False", False)],
    )
    def test_shadows_flag(self, value, expected):
        light = parse_scene_text(_wrap_lights(f"[light]\nshadows={value}\n[/light]")).lights[0]
        assert light.shadows is expected

    @pytest.mark.parametrize(
        "value, expected",
        [("point", LightType.POINT), ("spot", LightType.SPOT), ("directional", LightType.DIRECTIONAL)],
    )
    def test_light_types(self, value, expected):
        light = parse_scene_text(_wrap_lights(f"[light]\ntype={value}\n[/light]")).lights[0]
        assert light.type is expected

    def test_unknown_light_type_keeps_prior_value(self):
        light = parse_scene_text(_wrap_lights("[light]\ntype=spot\ntype=Area\n[/light]")).lights[0]
        assert light.type is LightType.SPOT

    def test_all_light_fields(self):
        body = "\n".join(
            [
                "[light]",
                "type=directional",
                "diffuseColor=0.1,0.2,0.3",
                "diffuseIntensity=2",
                "specularColor=0.4,0.5,0.6",
                "specularIntensity=3",
                "position=1,2,3",
                "range=100",
                "direction=0,-1,0",
                "shadows=no",
                "shadowBias=0.005",
                "coneInnerAngle=30",
                "coneOuterAngle=45",
                "[/light]",
            ]
        )
        light = parse_scene_text(_wrap_lights(body)).lights[0]
        assert light.type is LightType.DIRECTIONAL
        assert light.diffuse_color == Vector3(0.1, 0.2, 0.3)
        assert light.diffuse_intensity == 2.0
        assert light.specular_color == Vector3(0.4, 0.5, 0.6)
        assert light.specular_intensity == 3.0
        assert light.position == Vector3(1.0, 2.0, 3.0)
        assert light.range == 100.0
        assert light.direction == Vector3(0.0, -1.0, 0.0)
        assert light.shadows is False
        assert light.shadow_bias == pytest.approx(0.005)
        assert light.cone_inner_angle == 30.0
        assert light.cone_outer_angle == 45.0

    def test_unknown_keys_ignored(self):
        model = parse_scene_text(_wrap_resources("[texture]\nname=a\nsize=512\nnot a pair\n[/texture]"))
        assert model.textures == [Texture(file="", name="a")]

    def test_key_lookup_is_case_sensitive(self):
        model = parse_scene_text(_wrap_resources("[texture]\nName=a\n[/texture]"))
        assert model.textures[0].name == ""

    def test_value_with_equals_is_truncated_by_default(self):
        model = parse_scene_text(_wrap_resources("[texture]\nfile=a=b.png\n[/texture]"))
        assert model.textures[0].file == "a"

    def test_value_with_equals_kept_when_configured(self):
        cfg = ParserConfig(value_split="keep")
        model = parse_scene_text(_wrap_resources("[texture]\nfile=a=b.png\n[/texture]"), cfg)
        assert model.textures[0].file == "a=b.png"

    def test_mesh_fields(self):
        model = parse_scene_text(_wrap_resources("[mesh]\nfile = m/a.obj\nname = a\n[/mesh]"))
        assert model.meshes[0].file == "m/a.obj"
        assert model.meshes[0].name == "a"


class TestCrossReferences:
    def test_forward_reference_stays_unset(self):
        resources = "\n".join(
            [
                "[material]",
                "name=m",
                "diffuseTex=late",
                "[/material]",
                "[texture]",
                "name=late",
                "[/texture]",
            ]
        )
        model = parse_scene_text(_wrap_resources(resources))
        assert model.textures[0].name == "late"
        assert model.materials[0].diffuse_tex is None

    def test_reference_to_unknown_name_is_unset(self):
        model = parse_scene_text(
            _wrap_objects("[mesh]\nname=a\n[/mesh]", "[obj]\nmesh=b\nmaterial=none\n[/obj]")
        )
        assert model.objects[0].mesh is None
        assert model.objects[0].material is None

    def test_duplicate_names_resolve_to_first(self):
        resources = "\n".join(
            [
                "[texture]\nname=t\nfile=first.png\n[/texture]",
                "[texture]\nname=t\nfile=second.png\n[/texture]",
                "[material]\nname=m\nnormalTex=t\n[/material]",
            ]
        )
        model = parse_scene_text(_wrap_resources(resources))
        assert len(model.textures) == 2
        assert model.materials[0].normal_tex == 0

    def test_index_is_position_in_list(self):
        resources = "\n".join(
            [
                "[mesh]\nname=a\n[/mesh]",
                "[mesh]\nname=b\n[/mesh]",
                "[mesh]\nname=c\n[/mesh]",
            ]
        )
        model = parse_scene_text(_wrap_objects(resources, "[obj]\nmesh=c\n[/obj]"))
        assert model.objects[0].mesh == 2

    def test_pending_record_is_not_visible(self):
        # The material is still open when its own name is looked up.
        resources = "[material]\nname=m\n[/material]"
        objects = "[obj]\nmaterial=m\n[/obj]"
        model = parse_scene_text(_wrap_objects(resources, objects))
        assert model.objects[0].material == 0

        ctx = ParseContext(state=ParserState.IN_MATERIAL)
        process_line(ctx, "name=self")
        assert resolve_index("self", ctx.model.materials) is None

    def test_resolve_index(self):
        records = [Texture(name="a"), Texture(name="b"), Texture(name="a")]
        assert resolve_index("a", records) == 0
        assert resolve_index("b", records) == 1
        assert resolve_index("c", records) is None
        assert resolve_index("a", []) is None

    def test_unresolved_reference_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="scenefile.parser"):
            parse_scene_text(_wrap_objects("", "[obj]\nmesh=ghost\n[/obj]"))
        assert "ghost" in caplog.text

    def test_logging_can_be_disabled(self, caplog):
        cfg = ParserConfig(log_degradations=False)
        with caplog.at_level(logging.DEBUG, logger="scenefile.parser"):
            model = parse_scene_text(_wrap_objects("", "[obj]\nmesh=ghost\n[/obj]"), cfg)
        assert caplog.records == []
        assert model.objects[0].mesh is None

    def test_unparsable_number_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="scenefile"):
            parse_scene_text(_wrap_resources("[material]\nspecSize=shiny\n[/material]"))
        assert "shiny" in caplog.text

    def test_scalar_degradations_silenced_by_config(self, caplog):
        cfg = ParserConfig(log_degradations=False)
        text = _wrap_resources("[material]\nspecSize=shiny\ncolor=1,2\n[/material]")
        with caplog.at_level(logging.DEBUG, logger="scenefile"):
            model = parse_scene_text(text, cfg)
        assert caplog.records == []
        assert model.materials[0].spec_size == 0.0


class TestOrderingAndRecovery:
    def test_objects_keep_declaration_order(self):
        objects = "\n".join(f"[obj]\nname={n}\n[/obj]" for n in ("c", "a", "b"))
        model = parse_scene_text(_wrap_objects("", objects))
        assert [o.name for o in model.objects] == ["c", "a", "b"]

    def test_object_order_independent_of_resource_order(self):
        objects = "\n".join(f"[obj]\nname={n}\n[/obj]" for n in ("x", "y", "z"))
        res_a = "[mesh]\nname=m1\n[/mesh]\n[mesh]\nname=m2\n[/mesh]"
        res_b = "[mesh]\nname=m2\n[/mesh]\n[mesh]\nname=m1\n[/mesh]"
        names_a = [o.name for o in parse_scene_text(_wrap_objects(res_a, objects)).objects]
        names_b = [o.name for o in parse_scene_text(_wrap_objects(res_b, objects)).objects]
        assert names_a == names_b == ["x", "y", "z"]

    def test_unclosed_record_discarded_at_end(self, caplog):
        text = "[scene]\n[objects]\n[obj]\nname=lost\n"
        with caplog.at_level(logging.WARNING, logger="scenefile.parser"):
            model = parse_scene_text(text)
        assert model.objects == []
        assert "pending record discarded" in caplog.text

    def test_crossed_closing_tag_is_ignored(self):
        # [/resources] is not a transition from inside [texture]; the texture
        # stays open and picks up the later key.
        text = "[scene]\n[resources]\n[texture]\n[/resources]\nname=t\n[/texture]\n[/resources]\n[/scene]"
        model = parse_scene_text(text)
        assert model.textures == [Texture(name="t")]

    def test_sections_reopened_after_scene_close(self):
        text = _wrap_lights("[light]\n[/light]") + _wrap_lights("[light]\ntype=spot\n[/light]")
        model = parse_scene_text(text)
        assert [light.type for light in model.lights] == [LightType.POINT, LightType.SPOT]

    def test_content_outside_scene_ignored(self):
        text = "[texture]\nname=a\n[/texture]\n[scene]\n[/scene]\nname=b\n"
        assert parse_scene_text(text).is_empty()

    def test_parse_twice_gives_equal_models(self, minimal_scene_text):
        assert parse_scene_text(minimal_scene_text) == parse_scene_text(minimal_scene_text)
