import logging

import pytest
import yaml

from relgraph.architecture.onto_sql import SchemaGraph

logger = logging.getLogger(__name__)


@pytest.fixture()
def files_table():
    tc = yaml.safe_load(
        """
        name: files
        columns:
        -   name: id
            type: text
        primary_key:
        -   id
    """
    )
    return tc


@pytest.fixture()
def videos_table():
    tc = yaml.safe_load(
        """
        name: videos
        columns:
        -   name: id
            type: text
        -   name: posterId
            type: text
            nullable: true
        -   name: fileId
            type: text
        -   name: thumbnail_id
            type: text
            nullable: true
        primary_key:
        -   id
        foreign_keys:
        -   symbol: videos_posterId_fkey
            columns: [posterId]
            ref_table: files
            ref_columns: [id]
            on_update: NO ACTION
            on_delete: SET NULL
        -   symbol: videos_fileId_fkey
            columns: [fileId]
            ref_table: files
            ref_columns: [id]
            on_update: NO ACTION
            on_delete: CASCADE
        -   symbol: videos_thumbnail_id_fkey
            columns: [thumbnail_id]
            ref_table: files
            ref_columns: [id]
            on_update: NO ACTION
            on_delete: SET NULL
    """
    )
    return tc


@pytest.fixture()
def videos_graph(files_table, videos_table):
    return SchemaGraph.from_dict({"tables": [files_table, videos_table]})


@pytest.fixture()
def categories_graph():
    tc = yaml.safe_load(
        """
        tables:
        -   name: categories
            columns:
            -   name: id
                type: integer
            -   name: name
                type: varchar(255)
            -   name: parent_id
                type: integer
                nullable: true
            primary_key:
            -   id
            foreign_keys:
            -   symbol: categories_parent_id_fkey
                columns: [parent_id]
                ref_table: categories
                ref_columns: [id]
                on_delete: SET NULL
    """
    )
    return SchemaGraph.from_dict(tc)


@pytest.fixture()
def profiles_graph():
    tc = yaml.safe_load(
        """
        tables:
        -   name: users
            columns:
            -   name: id
                type: integer
            -   name: email
                type: varchar(255)
            primary_key:
            -   id
        -   name: profiles
            columns:
            -   name: id
                type: integer
            -   name: user_id
                type: integer
            -   name: bio
                type: text
                nullable: true
            primary_key:
            -   id
            indexes:
            -   name: profiles_user_id_key
                columns: [user_id]
                unique: true
            foreign_keys:
            -   symbol: profiles_user_id_fkey
                columns: [user_id]
                ref_table: users
                ref_columns: [id]
                on_delete: CASCADE
    """
    )
    return SchemaGraph.from_dict(tc)


@pytest.fixture()
def shop_graph():
    """Users, products and orders, with a few broken constraints on orders."""
    tc = yaml.safe_load(
        """
        tables:
        -   name: users
            columns:
            -   name: id
                type: integer
            primary_key:
            -   id
        -   name: products
            columns:
            -   name: id
                type: integer
            -   name: sku
                type: text
            primary_key:
            -   id
        -   name: orders
            columns:
            -   name: id
                type: integer
            -   name: buyer_id
                type: integer
            -   name: product_id
                type: integer
            -   name: product_sku
                type: text
            -   name: coupon_id
                type: integer
                nullable: true
            -   name: seller_id
                type: integer
            primary_key:
            -   id
            foreign_keys:
            -   symbol: orders_buyer_id_fkey
                columns: [buyer_id]
                ref_table: users
                ref_columns: [id]
            -   symbol: orders_product_fkey
                columns: [product_id, product_sku]
                ref_table: products
                ref_columns: [id, sku]
            -   symbol: orders_coupon_id_fkey
                columns: [coupon_id]
                ref_table: coupons
                ref_columns: [id]
            -   symbol: orders_seller_id_fkey
                columns: [seller_id]
                ref_table: users
                ref_columns: [uuid]
            -   symbol: orders_product_id_fkey
                columns: [product_id]
                ref_table: products
                ref_columns: [id]
    """
    )
    return SchemaGraph.from_dict(tc)


@pytest.fixture()
def posts_graph():
    """Three unnamed constraints whose columns all strip to ``author``."""
    tc = yaml.safe_load(
        """
        tables:
        -   name: users
            columns:
            -   name: id
                type: integer
            primary_key:
            -   id
        -   name: posts
            columns:
            -   name: id
                type: integer
            -   name: author_id
                type: integer
            -   name: authorId
                type: integer
            -   name: authorID
                type: integer
            primary_key:
            -   id
            foreign_keys:
            -   columns: [author_id]
                ref_table: users
                ref_columns: [id]
            -   columns: [authorId]
                ref_table: users
                ref_columns: [id]
            -   columns: [authorID]
                ref_table: users
                ref_columns: [id]
    """
    )
    return SchemaGraph.from_dict(tc)


@pytest.fixture()
def media_graph():
    tc = yaml.safe_load(
        """
        tables:
        -   name: files
            columns:
            -   name: id
            primary_key: [id]
        -   name: clips
            columns:
            -   name: id
            -   name: file_id
            -   name: preview_id
                nullable: true
            primary_key: [id]
            foreign_keys:
            -   {symbol: clips_file_id_fkey, columns: [file_id], ref_table: files, ref_columns: [id]}
            -   {symbol: clips_preview_id_fkey, columns: [preview_id], ref_table: files, ref_columns: [id]}
        -   name: songs
            columns:
            -   name: id
            -   name: file_id
            -   name: preview_id
                nullable: true
            primary_key: [id]
            foreign_keys:
            -   {symbol: songs_file_id_fkey, columns: [file_id], ref_table: files, ref_columns: [id]}
            -   {symbol: songs_preview_id_fkey, columns: [preview_id], ref_table: files, ref_columns: [id]}
        -   name: photos
            columns:
            -   name: id
            -   name: file_id
            -   name: album_id
                nullable: true
            primary_key: [id]
            foreign_keys:
            -   {symbol: photos_file_id_fkey, columns: [file_id], ref_table: files, ref_columns: [id]}
            -   {symbol: photos_album_id_fkey, columns: [album_id], ref_table: albums, ref_columns: [id]}
        -   name: albums
            columns:
            -   name: id
            -   name: cover_id
                nullable: true
            -   name: file_id
                nullable: true
            primary_key: [id]
            foreign_keys:
            -   {symbol: albums_cover_id_fkey, columns: [cover_id], ref_table: photos, ref_columns: [id]}
            -   {symbol: albums_file_id_fkey, columns: [file_id], ref_table: files, ref_columns: [id]}
    """
    )
    return SchemaGraph.from_dict(tc)
