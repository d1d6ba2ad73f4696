"""GraphQL documents for the mutations used by the upload workflows."""

CREATE_FILE_UPLOAD = """
mutation CreateFileUpload(
  $byte_size: BigInt!
  $checksum: String!
  $content_type: String!
  $filename: String!
  $file_upload_owner: FileUploadOwnerInput
) {
  create_file_upload(
    byte_size: $byte_size
    checksum: $checksum
    content_type: $content_type
    filename: $filename
    file_upload_owner: $file_upload_owner
  ) {
    id
    headers
    owner_sentera_id
    upload_url
  }
}
"""

CREATE_FILE_UPLOADS = """
mutation CreateFileUploads(
  $file_upload_owner: FileUploadOwnerInput
  $files: [FileUploadInput!]!
) {
  create_file_uploads(
    file_upload_owner: $file_upload_owner
    files: $files
  ) {
    id
    headers
    owner_sentera_id
    s3_url
    upload_url
  }
}
"""

CREATE_IMAGE_UPLOADS = """
mutation CreateImageUploads(
  $survey_sentera_id: ID!
  $images: [ImageUploadInput!]!
) {
  create_image_uploads(
    survey_sentera_id: $survey_sentera_id
    images: $images
  ) {
    id
    headers
    s3_url
    upload_url
  }
}
"""

UPSERT_SURVEYS = """
mutation CreateSurvey(
  $field_sentera_id: ID!
  $surveys: [SurveyImport!]!
) {
  upsert_surveys(
    field_sentera_id: $field_sentera_id
    surveys: $surveys
  ) {
    succeeded {
      sentera_id
    }
  }
}
"""

UPSERT_FILES = """
mutation UpsertFile(
  $files: [FileImport!]!
  $owner: FileOwnerInput!
) {
  upsert_files(
    files: $files
    owner: $owner
  ) {
    succeeded {
      ... on File {
        sentera_id
      }
    }
    failed {
      attributes {
        key
        details
        attribute
      }
    }
  }
}
"""

IMPORT_FILES = """
mutation ImportFile(
  $file_keys: [String!]!
  $file_type: FileType!
  $owner_type: FileOwnerType!
  $owner_sentera_id: ID!
) {
  import_files(
    file_keys: $file_keys
    file_type: $file_type
    owner_type: $owner_type
    owner_sentera_id: $owner_sentera_id
  ) {
    status
  }
}
"""

UPSERT_IMAGES = """
mutation UpsertImages(
  $survey_sentera_id: ID!
  $images: [ImageImport!]!
) {
  upsert_images(
    survey_sentera_id: $survey_sentera_id
    images: $images
  ) {
    succeeded {
      ... on Image {
        sentera_id
        filename
      }
    }
    failed {
      attributes {
        key
        details
        attribute
      }
    }
  }
}
"""

UPSERT_MOSAICS = """
mutation UpsertMosaic(
  $survey_sentera_id: ID!
  $mosaics: [MosaicImport!]!
) {
  upsert_mosaics(
    survey_sentera_id: $survey_sentera_id
    mosaics: $mosaics
  ) {
    succeeded {
      ... on Mosaic {
        sentera_id
      }
    }
    failed {
      attributes {
        key
        details
        attribute
      }
    }
  }
}
"""

UPSERT_FEATURE_SET = """
mutation UpsertFeatureSet(
  $feature_set: FeatureSetImport!
  $owner: FeatureSetOwnerInput!
) {
  upsert_feature_set(
    feature_set: $feature_set
    owner: $owner
  ) {
    succeeded {
      ... on FeatureSet {
        sentera_id
        name
        type
        status
        released
      }
    }
    failed {
      attributes {
        key
        details
        attribute
      }
    }
  }
}
"""

IMPORT_FEATURE_SET = """
mutation ImportFeatureSet(
  $feature_set_sentera_id: ID
  $name: String!
  $type: FeatureSetType!
  $geometry_file_key: FileKey
  $annotation_file_keys: [FileKey!]
) {
  import_feature_set(
    feature_set_sentera_id: $feature_set_sentera_id
    name: $name
    type: $type
    geometry_file_key: $geometry_file_key
    annotation_file_keys: $annotation_file_keys
  ) {
    status
  }
}
"""
